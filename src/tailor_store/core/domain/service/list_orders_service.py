from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from returns.result import Failure, Result

from tailor_store.core.domain.model.design import UNKNOWN_DESIGN_NAME
from tailor_store.core.domain.model.errors import StoreError, ValidationError
from tailor_store.core.domain.model.order import Order, OrderStatus
from tailor_store.core.ports.inbound.list_orders import (
    ListOrdersQuery,
    ListOrdersUseCase,
    OrderView,
)
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.core.ports.outbound.orders import OrderRepository


@dataclass(frozen=True)
class ListOrdersDeps:
    orders: OrderRepository
    designs: DesignRepository


@dataclass(frozen=True)
class ListOrdersService(ListOrdersUseCase):
    deps: ListOrdersDeps

    def list_orders(self, query: ListOrdersQuery) -> Result[Sequence[OrderView], StoreError]:
        status: OrderStatus | None = None
        if query.status is not None:
            try:
                status = OrderStatus(query.status.strip().lower())
            except ValueError:
                return Failure(
                    ValidationError("status must be one of: pending, accepted, rejected")
                )

        return self.deps.designs.load_designs().bind(
            lambda designs: self.deps.orders.load_orders().map(
                lambda orders: _to_views(
                    orders, {d.id: d.name for d in designs}, status
                )
            )
        )


def _to_views(
    orders: Sequence[Order],
    names: Mapping[str, str],
    status: OrderStatus | None,
) -> Sequence[OrderView]:
    return tuple(
        OrderView(order=o, design_name=names.get(o.design_id, UNKNOWN_DESIGN_NAME))
        for o in orders
        if status is None or o.status is status
    )
