import pytest
from returns.result import Failure, Success

from conftest import make_design
from tailor_store.core.domain.model.errors import (
    DesignNotFound,
    InvalidConstraint,
    PersistenceError,
    PublishError,
    ValidationError,
)
from tailor_store.core.domain.model.order import ComboType, OrderStatus
from tailor_store.core.domain.service.place_order_service import (
    PlaceOrderDeps,
    PlaceOrderService,
)
from tailor_store.core.ports.inbound.place_order import PlaceOrderCommand


@pytest.fixture()
def svc(designs, orders, events, stocked):
    stocked(make_design("d-1", {"men": {"XL": 1}}))
    return PlaceOrderService(PlaceOrderDeps(designs=designs, orders=orders, events=events))


def _cmd(**overrides) -> PlaceOrderCommand:
    fields = dict(
        design_id="d-1",
        customer_name="Asha",
        customer_phone="98450 00000",
        customer_address="12 MG Road",
        father="XL",
        sons=("4-5",),
    )
    fields.update(overrides)
    return PlaceOrderCommand(**fields)


def test_place_order_labels_combo_and_stores_pending(svc, orders):
    res = svc.place_order(_cmd())
    assert isinstance(res, Success)
    receipt = res.unwrap()

    assert receipt.combo_type is ComboType.FATHER_SON
    assert receipt.status is OrderStatus.PENDING
    assert receipt.selected_sizes == {"Father": "XL", "Son": "4-5"}

    stored = orders.get_order(receipt.order_id).unwrap()
    assert stored.customer.name == "Asha"
    assert stored.customer.country_code == "+91"


def test_ordering_a_sold_out_size_is_allowed(svc):
    # stock is only checked when staff accept the order
    res = svc.place_order(_cmd(father="M", sons=()))
    assert res.unwrap().combo_type is ComboType.CUSTOM


def test_several_children_are_numbered(svc):
    receipt = svc.place_order(_cmd(father="N/A", mother="L", sons=(), daughters=("2-3", "9-10"))).unwrap()
    assert receipt.selected_sizes == {"Mother": "L", "Daughter 1": "2-3", "Daughter 2": "9-10"}
    assert receipt.combo_type is ComboType.MOTHER_DAUGHTER


@pytest.mark.parametrize(
    "overrides,error",
    [
        ({"customer_name": " "}, ValidationError),
        ({"customer_phone": ""}, ValidationError),
        ({"customer_address": ""}, ValidationError),
        ({"design_id": ""}, ValidationError),
        ({"father": "N/A", "sons": ()}, ValidationError),
        ({"father": "4-5"}, InvalidConstraint),
        ({"design_id": "missing"}, DesignNotFound),
    ],
)
def test_place_order_failures_store_nothing(svc, orders, overrides, error):
    res = svc.place_order(_cmd(**overrides))
    assert isinstance(res, Failure)
    assert isinstance(res.failure(), error)
    assert orders.load_orders().unwrap() == ()


def test_store_failure_is_reported(svc, orders):
    orders.fail_writes = True
    assert isinstance(svc.place_order(_cmd()).failure(), PersistenceError)


def test_publish_failure_after_order_was_stored(svc, orders, events):
    events.fail = True
    res = svc.place_order(_cmd())
    assert isinstance(res.failure(), PublishError)
    assert len(orders.load_orders().unwrap()) == 1
