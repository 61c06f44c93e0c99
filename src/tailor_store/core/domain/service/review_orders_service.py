from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Set

from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.errors import (
    AlreadyProcessed,
    InvalidConstraint,
    StoreError,
)
from tailor_store.core.domain.model.order import Order, OrderStatus
from tailor_store.core.domain.service.reconcile import Reconciliation, reconcile
from tailor_store.core.ports.inbound.review_orders import (
    AcceptanceReport,
    ReviewOrdersUseCase,
)
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.core.ports.outbound.events import (
    EventPublisher,
    OrderAccepted,
    OrderRejected,
)
from tailor_store.core.ports.outbound.orders import OrderRepository
from tailor_store.shared.logger import get_logger

logger = get_logger("orders")


@dataclass(frozen=True)
class ReviewOrdersDeps:
    designs: DesignRepository
    orders: OrderRepository
    events: EventPublisher


@dataclass(frozen=True)
class ReviewOrdersService(ReviewOrdersUseCase):
    """Staff decisions on pending orders.

    Accepting reads the design's current stock, reconciles it against the
    order, writes the new stock back (only when something was deducted) and
    then marks the order accepted. Nothing is written until the previous step
    has been confirmed by the store, so a failed stock write leaves the order
    pending.

    Each order is reviewed by one call at a time: a second accept or reject
    for an order already under review gets AlreadyProcessed, and the status
    write itself only succeeds from pending. Different orders for the same
    design are not serialized and can lose a stock update.
    """

    deps: ReviewOrdersDeps
    _in_review: Set[str] = field(default_factory=set, init=False, repr=False, compare=False)
    _guard: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def accept(self, order_id: str) -> Result[AcceptanceReport, StoreError]:
        claimed = self._claim(order_id)
        if isinstance(claimed, Failure):
            return claimed
        try:
            return self._accept(order_id)
        finally:
            self._release(order_id)

    def reject(self, order_id: str) -> Result[Order, StoreError]:
        claimed = self._claim(order_id)
        if isinstance(claimed, Failure):
            return claimed
        try:
            return self._reject(order_id)
        finally:
            self._release(order_id)

    def _claim(self, order_id: str) -> Result[str, StoreError]:
        with self._guard:
            if order_id in self._in_review:
                return Failure(
                    AlreadyProcessed(
                        message="order is already being reviewed",
                        order_id=order_id,
                        status=OrderStatus.PENDING.value,
                    )
                )
            self._in_review.add(order_id)
        return Success(order_id)

    def _release(self, order_id: str) -> None:
        with self._guard:
            self._in_review.discard(order_id)

    def _accept(self, order_id: str) -> Result[AcceptanceReport, StoreError]:
        pending = self._load_pending(order_id)
        if isinstance(pending, Failure):
            return pending
        order = pending.unwrap()

        got = self.deps.designs.get_design(order.design_id)
        if isinstance(got, Failure):
            return got
        design = got.unwrap()

        try:
            outcome: Reconciliation = reconcile(design.stock, order.selected_sizes)
        except InvalidConstraint as exc:
            return Failure(exc)

        if outcome.changed:
            saved = self.deps.designs.save_design(design.with_stock(outcome.matrix))
            if isinstance(saved, Failure):
                return saved

        for skipped in outcome.skipped:
            logger.warning(
                "insufficient stock order=%s member=%s %s/%s",
                order.id,
                skipped.role,
                skipped.category.value,
                skipped.size,
            )

        marked = self.deps.orders.set_order_status(
            order.id, OrderStatus.ACCEPTED, expected=OrderStatus.PENDING
        )
        if isinstance(marked, Failure):
            return marked
        accepted = marked.unwrap()

        report = AcceptanceReport(
            order=accepted,
            outcomes=outcome.outcomes,
            stock_written=outcome.changed,
        )
        logger.info(
            "order accepted id=%s design=%s deducted=%d skipped=%d",
            accepted.id,
            accepted.design_id,
            len(report.deducted),
            len(report.skipped),
        )
        event = OrderAccepted(
            order_id=accepted.id,
            design_id=accepted.design_id,
            deducted=len(report.deducted),
            skipped=len(report.skipped),
        )
        return self.deps.events.publish(event).map(lambda _: report)

    def _reject(self, order_id: str) -> Result[Order, StoreError]:
        return (
            self._load_pending(order_id)
            .bind(
                lambda o: self.deps.orders.set_order_status(
                    o.id, OrderStatus.REJECTED, expected=OrderStatus.PENDING
                )
            )
            .bind(self._announce_rejection)
        )

    def _load_pending(self, order_id: str) -> Result[Order, StoreError]:
        return self.deps.orders.get_order(order_id).bind(_require_pending)

    def _announce_rejection(self, order: Order) -> Result[Order, StoreError]:
        logger.info("order rejected id=%s", order.id)
        return self.deps.events.publish(OrderRejected(order.id)).map(lambda _: order)


def _require_pending(order: Order) -> Result[Order, StoreError]:
    if order.status.is_terminal:
        return Failure(
            AlreadyProcessed(
                message="order was already reviewed; nothing was changed",
                order_id=order.id,
                status=order.status.value,
            )
        )
    return Success(order)
