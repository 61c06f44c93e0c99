from returns.result import Failure

from conftest import make_design
from tailor_store.core.domain.model.design import UNKNOWN_DESIGN_NAME
from tailor_store.core.domain.model.errors import ValidationError
from tailor_store.core.domain.model.order import (
    ComboType,
    CustomerContact,
    OrderDraft,
    OrderStatus,
)
from tailor_store.core.domain.service.list_orders_service import (
    ListOrdersDeps,
    ListOrdersService,
)
from tailor_store.core.ports.inbound.list_orders import ListOrdersQuery


def _draft(design_id: str) -> OrderDraft:
    return OrderDraft(
        design_id=design_id,
        combo_type=ComboType.COUPLE,
        selected_sizes={"Father": "L", "Mother": "M"},
        customer=CustomerContact(name="Ravi", phone="2", address="y"),
    )


def test_orders_carry_design_name_or_unknown(designs, orders, stocked):
    stocked(make_design("d-1", name="Garden Leaf Print"))
    known = orders.create_order(_draft("d-1")).unwrap()
    gone = orders.create_order(_draft("deleted")).unwrap()

    svc = ListOrdersService(ListOrdersDeps(orders=orders, designs=designs))
    views = {v.order.id: v.design_name for v in svc.list_orders(ListOrdersQuery()).unwrap()}

    assert views == {known.id: "Garden Leaf Print", gone.id: UNKNOWN_DESIGN_NAME}


def test_status_filter(designs, orders):
    first = orders.create_order(_draft("d-1")).unwrap()
    orders.create_order(_draft("d-1"))
    orders.set_order_status(first.id, OrderStatus.REJECTED)

    svc = ListOrdersService(ListOrdersDeps(orders=orders, designs=designs))
    rejected = svc.list_orders(ListOrdersQuery(status="Rejected")).unwrap()
    pending = svc.list_orders(ListOrdersQuery(status="pending")).unwrap()

    assert [v.order.id for v in rejected] == [first.id]
    assert len(pending) == 1

    res = svc.list_orders(ListOrdersQuery(status="shipped"))
    assert isinstance(res, Failure)
    assert isinstance(res.failure(), ValidationError)
