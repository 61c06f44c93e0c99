from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.order import Order


@dataclass(frozen=True)
class ListOrdersQuery:
    status: str | None = None  # pending | accepted | rejected


@dataclass(frozen=True)
class OrderView:
    order: Order
    design_name: str


class ListOrdersUseCase(Protocol):
    def list_orders(self, query: ListOrdersQuery) -> Result[Sequence[OrderView], StoreError]: ...
