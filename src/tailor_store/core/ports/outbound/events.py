from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

from returns.result import Result

from tailor_store.core.domain.model.errors import StoreError


@dataclass(frozen=True)
class OrderPlaced:
    order_id: str
    design_id: str
    combo_type: str


@dataclass(frozen=True)
class OrderAccepted:
    order_id: str
    design_id: str
    deducted: int
    skipped: int


@dataclass(frozen=True)
class OrderRejected:
    order_id: str


StoreEvent = Union[OrderPlaced, OrderAccepted, OrderRejected]


class EventPublisher(Protocol):
    def publish(self, event: StoreEvent) -> Result[None, StoreError]: ...
