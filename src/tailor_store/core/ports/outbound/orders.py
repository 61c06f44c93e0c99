from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.order import Order, OrderDraft, OrderStatus


class OrderRepository(Protocol):
    def load_orders(self) -> Result[Sequence[Order], StoreError]:
        """All orders, newest first."""
        ...

    def get_order(self, order_id: str) -> Result[Order, StoreError]: ...

    def create_order(self, draft: OrderDraft) -> Result[Order, StoreError]:
        """Store assigns id, created_at and status=pending."""
        ...

    def set_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        expected: OrderStatus | None = None,
    ) -> Result[Order, StoreError]:
        """Write a new status; with `expected`, only if the current status matches
        (AlreadyProcessed otherwise). The check and the write are atomic."""
        ...
