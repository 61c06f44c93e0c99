from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from returns.pipeline import flow
from returns.pointfree import bind, map_
from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.errors import (
    InvalidConstraint,
    StoreError,
    ValidationError,
)
from tailor_store.core.domain.model.family import build_selection, category_for_role
from tailor_store.core.domain.model.order import CustomerContact, Order, OrderDraft
from tailor_store.core.domain.model.stock import check_size
from tailor_store.core.domain.service.combo import classify
from tailor_store.core.ports.inbound.place_order import (
    OrderReceipt,
    PlaceOrderCommand,
    PlaceOrderUseCase,
)
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.core.ports.outbound.events import EventPublisher, OrderPlaced
from tailor_store.core.ports.outbound.orders import OrderRepository
from tailor_store.shared.logger import get_logger

logger = get_logger("orders")


@dataclass(frozen=True)
class PlaceOrderDeps:
    designs: DesignRepository
    orders: OrderRepository
    events: EventPublisher


@dataclass(frozen=True)
class PlaceOrderService(PlaceOrderUseCase):
    deps: PlaceOrderDeps

    def place_order(self, command: PlaceOrderCommand) -> Result[OrderReceipt, StoreError]:
        return flow(
            command,
            _validate_command,
            bind(_build_draft),
            bind(self._check_design),
            bind(self._persist),
            bind(self._publish),
            map_(_to_receipt),
        )

    def _check_design(self, draft: OrderDraft) -> Result[OrderDraft, StoreError]:
        return self.deps.designs.get_design(draft.design_id).map(lambda _: draft)

    def _persist(self, draft: OrderDraft) -> Result[Order, StoreError]:
        return self.deps.orders.create_order(draft)

    def _publish(self, order: Order) -> Result[Order, StoreError]:
        logger.info(
            "order placed id=%s design=%s combo=%s members=%d",
            order.id,
            order.design_id,
            order.combo_type.value,
            len(order.selected_sizes),
        )
        event = OrderPlaced(order.id, order.design_id, order.combo_type.value)
        return self.deps.events.publish(event).map(lambda _: order)


# ---- pure helpers ----------------------------------------------------------


def _validate_command(cmd: PlaceOrderCommand) -> Result[PlaceOrderCommand, StoreError]:
    if not cmd.design_id.strip():
        return Failure(ValidationError("design_id is required"))
    if not cmd.customer_name.strip():
        return Failure(ValidationError("customer_name is required"))
    if not cmd.customer_phone.strip():
        return Failure(ValidationError("customer_phone is required"))
    if not cmd.customer_address.strip():
        return Failure(ValidationError("customer_address is required"))
    return Success(cmd)


def _checked_selection(cmd: PlaceOrderCommand) -> Result[Dict[str, str], StoreError]:
    selection = build_selection(cmd.father, cmd.mother, cmd.sons, cmd.daughters)
    if not selection:
        return Failure(ValidationError("select a size for at least one family member"))
    try:
        for role, size in selection.items():
            check_size(category_for_role(role), size)
    except InvalidConstraint as exc:
        return Failure(exc)
    return Success(selection)


def _build_draft(cmd: PlaceOrderCommand) -> Result[OrderDraft, StoreError]:
    return _checked_selection(cmd).map(
        lambda selection: OrderDraft(
            design_id=cmd.design_id.strip(),
            combo_type=classify(selection),
            selected_sizes=selection,
            customer=CustomerContact(
                name=cmd.customer_name.strip(),
                phone=cmd.customer_phone.strip(),
                address=cmd.customer_address.strip(),
                email=cmd.customer_email.strip(),
                country_code=cmd.country_code.strip() or "+91",
            ),
        )
    )


def _to_receipt(order: Order) -> OrderReceipt:
    return OrderReceipt(
        order_id=order.id,
        design_id=order.design_id,
        combo_type=order.combo_type,
        selected_sizes=dict(order.selected_sizes),
        status=order.status,
    )
