from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, List, Protocol, TypeVar

from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.order import Order
from tailor_store.core.ports.outbound.changes import Change, ChangeFeed, Unsubscribe
from tailor_store.shared.logger import get_logger

logger = get_logger("feed")

T = TypeVar("T")


@dataclass
class Listeners(Generic[T]):
    _callbacks: List[Callable[[Change[T]], None]] = field(default_factory=list)

    def subscribe(self, callback: Callable[[Change[T]], None]) -> Unsubscribe:
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def emit(self, change: Change[T]) -> None:
        # a failing subscriber must not undo a write that already happened
        for callback in list(self._callbacks):
            try:
                callback(change)
            except Exception:  # noqa: BLE001
                logger.exception("change listener failed for %s %s", change.kind.value, change.key)


class Subscribable(Protocol[T]):
    def subscribe(self, callback: Callable[[Change[T]], None]) -> Unsubscribe: ...


@dataclass(frozen=True)
class StoreChangeFeed(ChangeFeed):
    """Exposes two repositories' `subscribe` hooks as the ChangeFeed port."""

    designs: Subscribable[Design]
    orders: Subscribable[Order]

    def on_design_changed(self, callback: Callable[[Change[Design]], None]) -> Unsubscribe:
        return self.designs.subscribe(callback)

    def on_order_changed(self, callback: Callable[[Change[Order]], None]) -> Unsubscribe:
        return self.orders.subscribe(callback)
