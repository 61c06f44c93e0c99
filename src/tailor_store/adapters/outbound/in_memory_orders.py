from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from tailor_store.adapters.outbound.listeners import Listeners
from tailor_store.core.domain.model.design import new_id, now_millis
from tailor_store.core.domain.model.errors import (
    AlreadyProcessed,
    OrderNotFound,
    PersistenceError,
    StoreError,
)
from tailor_store.core.domain.model.order import Order, OrderDraft, OrderStatus
from tailor_store.core.ports.outbound.changes import Change, ChangeKind, Unsubscribe
from tailor_store.core.ports.outbound.orders import OrderRepository


@dataclass
class InMemoryOrderRepository(OrderRepository):
    _store: Dict[str, Order] = field(default_factory=dict)
    fail_writes: bool = False
    _listeners: Listeners[Order] = field(default_factory=Listeners)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def subscribe(self, callback) -> Unsubscribe:
        return self._listeners.subscribe(callback)

    def load_orders(self) -> Result[Sequence[Order], StoreError]:
        orders = reversed(list(self._store.values()))  # insertion order, latest first
        return Success(tuple(sorted(orders, key=lambda o: o.created_at, reverse=True)))

    def get_order(self, order_id: str) -> Result[Order, StoreError]:
        order = self._store.get(order_id)
        if order is None:
            return Failure(OrderNotFound(message="order not found", order_id=order_id))
        return Success(order)

    def create_order(self, draft: OrderDraft) -> Result[Order, StoreError]:
        if self.fail_writes:
            return Failure(PersistenceError(message="order store is unavailable"))
        order = Order(
            id=new_id(),
            design_id=draft.design_id,
            combo_type=draft.combo_type,
            selected_sizes=dict(draft.selected_sizes),
            customer=draft.customer,
            status=OrderStatus.PENDING,
            created_at=now_millis(),
        )
        self._store[order.id] = order
        self._listeners.emit(Change(ChangeKind.INSERT, order.id, order))
        return Success(order)

    def set_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        expected: OrderStatus | None = None,
    ) -> Result[Order, StoreError]:
        if self.fail_writes:
            return Failure(PersistenceError(message="order store is unavailable"))
        with self._lock:
            got = self.get_order(order_id)
            if isinstance(got, Failure):
                return got
            current = got.unwrap()
            if expected is not None and current.status is not expected:
                return Failure(
                    AlreadyProcessed(
                        message=f"order is no longer {expected.value}",
                        order_id=order_id,
                        status=current.status.value,
                    )
                )
            updated = current.with_status(status)
            self._store[order_id] = updated
        self._listeners.emit(Change(ChangeKind.UPDATE, order_id, updated))
        return Success(updated)
