import pytest
from returns.result import Failure, Success

from conftest import make_design
from tailor_store.core.domain.model.design import DEFAULT_LABEL, ChildType
from tailor_store.core.domain.model.errors import (
    DesignNotFound,
    InvalidConstraint,
    PersistenceError,
    ValidationError,
)
from tailor_store.core.domain.model.stock import Category
from tailor_store.core.domain.service.manage_designs_service import (
    ManageDesignsDeps,
    ManageDesignsService,
)
from tailor_store.core.ports.inbound.manage_designs import (
    AdjustStockCommand,
    RegisterDesignCommand,
    SetStockCommand,
    UpdateDesignCommand,
)


@pytest.fixture()
def svc(designs):
    return ManageDesignsService(ManageDesignsDeps(designs=designs))


def _register(svc, **overrides):
    fields = dict(
        name="Paisley Night",
        color="Navy",
        fabric="Silk",
        image_url="https://img.example/p.jpg",
    )
    fields.update(overrides)
    return svc.register(RegisterDesignCommand(**fields))


def test_register_assigns_id_timestamp_and_default_label(svc, designs):
    res = _register(svc, stock={"men": {"L": 3}}, child_type="Unisex")
    assert isinstance(res, Success)
    d = res.unwrap()

    assert d.id and d.created_at > 0
    assert d.label == DEFAULT_LABEL
    assert d.child_type is ChildType.UNISEX
    assert d.stock.get(Category.MEN, "L") == 3
    assert designs.get_design(d.id).unwrap() == d


@pytest.mark.parametrize(
    "overrides,error",
    [
        ({"name": "  "}, ValidationError),
        ({"image_url": ""}, ValidationError),
        ({"child_type": "teens"}, InvalidConstraint),
        ({"stock": {"men": {"4-5": 1}}}, InvalidConstraint),
        ({"stock": {"men": {"L": "many"}}}, ValidationError),
    ],
)
def test_register_rejects_bad_input(svc, designs, overrides, error):
    res = _register(svc, **overrides)
    assert isinstance(res, Failure)
    assert isinstance(res.failure(), error)
    assert designs.load_designs().unwrap() == ()


def test_update_details_keeps_unset_fields(svc, stocked):
    stocked(make_design("d-1", {"women": {"M": 2}}))
    res = svc.update_details(UpdateDesignCommand(design_id="d-1", color=" Rust ", label="NEW"))

    d = res.unwrap()
    assert d.color == "Rust"
    assert d.label == "NEW"
    assert d.name == "Garden Leaf Print"
    assert d.stock.get(Category.WOMEN, "M") == 2


def test_update_can_replace_the_whole_matrix(svc, stocked):
    stocked(make_design("d-1", {"women": {"M": 2}}))
    d = svc.update_details(
        UpdateDesignCommand(design_id="d-1", stock={"girls": {"3-4": 6}})
    ).unwrap()
    assert d.stock.get(Category.WOMEN, "M") == 0
    assert d.stock.get(Category.GIRLS, "3-4") == 6


@pytest.mark.parametrize("blank", [{"name": ""}, {"image_url": "  "}])
def test_update_rejects_blank_required_fields(svc, designs, stocked, blank):
    stocked(make_design("d-1"))
    res = svc.update_details(UpdateDesignCommand(design_id="d-1", **blank))
    assert isinstance(res.failure(), ValidationError)
    assert designs.get_design("d-1").unwrap().image_url == "https://img.example/d-1.jpg"


def test_update_unknown_design(svc):
    res = svc.update_details(UpdateDesignCommand(design_id="nope", name="x"))
    assert isinstance(res.failure(), DesignNotFound)


def test_set_and_adjust_stock(svc, designs, stocked):
    stocked(make_design("d-1"))

    svc.set_stock(SetStockCommand("d-1", "boys", "6-7", 3))
    d = svc.adjust_stock(AdjustStockCommand("d-1", "Boys", "6-7", -5)).unwrap()

    assert d.stock.get(Category.BOYS, "6-7") == 0
    assert designs.get_design("d-1").unwrap().stock.get(Category.BOYS, "6-7") == 0


def test_stock_edit_does_not_touch_stored_matrix_on_failure(svc, designs, stocked):
    stocked(make_design("d-1", {"men": {"M": 1}}))
    designs.fail_writes = True

    res = svc.set_stock(SetStockCommand("d-1", "men", "M", 9))
    assert isinstance(res.failure(), PersistenceError)
    assert designs.get_design("d-1").unwrap().stock.get(Category.MEN, "M") == 1


def test_stock_edit_with_invalid_cell(svc, stocked):
    stocked(make_design("d-1"))
    res = svc.set_stock(SetStockCommand("d-1", "men", "13-14", 1))
    assert isinstance(res.failure(), InvalidConstraint)


def test_delete_and_list(svc, stocked):
    stocked(
        make_design("a", name="Garden Leaf Print", created_at=2),
        make_design("b", name="Indigo Block", fabric="Cotton", created_at=1),
    )
    assert [d.id for d in svc.list_designs().unwrap()] == ["a", "b"]
    assert [d.id for d in svc.list_designs("cotton").unwrap()] == ["b"]

    assert isinstance(svc.delete("a"), Success)
    assert [d.id for d in svc.list_designs().unwrap()] == ["b"]
    assert isinstance(svc.delete("a").failure(), DesignNotFound)
