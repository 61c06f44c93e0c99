from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Protocol, TypeVar

from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.order import Order

T = TypeVar("T")


class ChangeKind(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class Change(Generic[T]):
    kind: ChangeKind
    key: str
    record: T | None = None  # None for deletes


Unsubscribe = Callable[[], None]


class ChangeFeed(Protocol):
    def on_design_changed(
        self, callback: Callable[[Change[Design]], None]
    ) -> Unsubscribe: ...

    def on_order_changed(
        self, callback: Callable[[Change[Order]], None]
    ) -> Unsubscribe: ...
