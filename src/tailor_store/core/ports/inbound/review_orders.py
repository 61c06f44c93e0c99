from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple

from returns.result import Result

from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.order import Order
from tailor_store.core.domain.service.reconcile import Deducted, Outcome, Skipped


@dataclass(frozen=True)
class AcceptanceReport:
    order: Order
    outcomes: Tuple[Outcome, ...]
    stock_written: bool

    @property
    def deducted(self) -> Tuple[Deducted, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, Deducted))

    @property
    def skipped(self) -> Tuple[Skipped, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, Skipped))


class ReviewOrdersUseCase(Protocol):
    def accept(self, order_id: str) -> Result[AcceptanceReport, StoreError]: ...

    def reject(self, order_id: str) -> Result[Order, StoreError]: ...
