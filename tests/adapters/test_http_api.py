import pytest
from fastapi.testclient import TestClient

from tailor_store.adapters.inbound.web.fastapi_app import create_app
from tailor_store.bootstrap import build_usecases
from tailor_store.config import Settings


@pytest.fixture()
def client() -> TestClient:
    # in-memory store seeded with the demo design "1"
    return TestClient(create_app(build_usecases(Settings())))


def _order(client, **overrides):
    body = {
        "design_id": "1",
        "father": "XXL",
        "sons": ["4-5"],
        "customer_name": "Asha",
        "customer_phone": "98450 00000",
        "customer_address": "12 MG Road",
    }
    body.update(overrides)
    return client.post("/orders", json=body)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_catalog_browse_by_combo_and_size(client):
    r = client.get("/catalog", params={"mode": "F-S", "father": "XXL", "sons": ["4-5"]})
    assert r.status_code == 200
    assert [d["id"] for d in r.json()] == ["1"]

    r = client.get("/catalog", params={"mode": "F-S", "father": "XL"})
    assert r.json() == []


def test_catalog_without_selection_is_empty(client):
    assert client.get("/catalog").json() == []


def test_catalog_rejects_unknown_mode_and_bad_size(client):
    r = client.get("/catalog", params={"mode": "uncles"})
    assert r.status_code == 400
    assert r.json()["type"] == "RequestValidationError"

    r = client.get("/catalog", params={"mode": "boys", "sons": ["XL"]})
    assert r.status_code == 400
    assert r.json()["type"] == "InvalidConstraint"


def test_design_crud_and_stock_edits(client):
    r = client.post(
        "/designs",
        json={
            "name": "Indigo Block",
            "fabric": "Cotton",
            "image_url": "https://img.example/i.jpg",
            "child_type": "unisex",
            "stock": {"women": {"M": 2}},
        },
    )
    assert r.status_code == 201
    design = r.json()
    assert r.headers["Location"] == f"/designs/{design['id']}"
    assert design["label"] == "PREMIUM DESIGN"
    assert design["stock"]["women"]["M"] == 2
    assert design["total_units"] == 2

    r = client.put(f"/designs/{design['id']}/stock/boys/6-7", json={"count": 4})
    assert r.json()["stock"]["boys"]["6-7"] == 4

    r = client.post(f"/designs/{design['id']}/stock/women/M/adjust", json={"delta": -5})
    assert r.json()["stock"]["women"]["M"] == 0

    r = client.patch(f"/designs/{design['id']}", json={"color": "Blue"})
    assert r.json()["color"] == "Blue"

    assert [d["id"] for d in client.get("/designs", params={"search": "cotton"}).json()] == [
        design["id"]
    ]

    assert client.delete(f"/designs/{design['id']}").status_code == 204
    assert client.delete(f"/designs/{design['id']}").status_code == 404


def test_design_validation_errors(client):
    r = client.post("/designs", json={"name": "", "image_url": "x"})
    assert r.status_code == 400

    r = client.put("/designs/1/stock/men/4-5", json={"count": 1})
    assert r.status_code == 400
    assert r.json()["type"] == "InvalidConstraint"

    r = client.patch("/designs/missing", json={"name": "x"})
    assert r.status_code == 404
    assert r.json()["type"] == "DesignNotFound"


def test_order_flow_place_accept_and_list(client):
    r = _order(client)
    assert r.status_code == 201
    placed = r.json()
    assert placed["combo_type"] == "F-S"
    assert placed["status"] == "pending"
    assert placed["selected_sizes"] == {"Father": "XXL", "Son": "4-5"}

    r = client.post(f"/orders/{placed['order_id']}/accept")
    assert r.status_code == 200
    report = r.json()
    assert report["order"]["status"] == "accepted"
    assert report["stock_written"] is True
    assert [o["result"] for o in report["outcomes"]] == ["deducted", "deducted"]

    stock = client.get("/designs").json()[0]["stock"]
    assert stock["men"]["XXL"] == 8
    assert stock["boys"]["4-5"] == 1

    r = client.post(f"/orders/{placed['order_id']}/accept")
    assert r.status_code == 409
    assert r.json()["type"] == "AlreadyProcessed"

    listed = client.get("/orders").json()
    assert listed[0]["design_name"] == "Garden Leaf Print"
    assert client.get("/orders", params={"status": "pending"}).json() == []


def test_accept_reports_skipped_members(client):
    placed = _order(client, father="M", sons=["2-3"]).json()
    report = client.post(f"/orders/{placed['order_id']}/accept").json()

    assert report["stock_written"] is False
    assert {o["reason"] for o in report["outcomes"]} == {"InsufficientStock"}


def test_catalog_follows_stock_changes(client):
    assert [d["id"] for d in client.get("/catalog", params={"father": "3XL"}).json()] == ["1"]
    client.put("/designs/1/stock/men/3XL", json={"count": 0})
    assert client.get("/catalog", params={"father": "3XL"}).json() == []


def test_order_errors(client):
    assert _order(client, customer_name="").status_code == 400
    assert _order(client, father="N/A", sons=[]).status_code == 400
    assert _order(client, design_id="missing").status_code == 404
    assert client.post("/orders/nope/reject").status_code == 404
    assert client.get("/orders", params={"status": "shipped"}).status_code == 400


def test_reject_and_unknown_design_name(client):
    placed = _order(client).json()
    r = client.post(f"/orders/{placed['order_id']}/reject")
    assert r.status_code == 200
    assert r.json()["status"] == "rejected"

    client.delete("/designs/1")
    assert client.get("/orders").json()[0]["design_name"] == "Unknown Design"
