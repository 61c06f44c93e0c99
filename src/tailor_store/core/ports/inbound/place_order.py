from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.family import NOT_ORDERING
from tailor_store.core.domain.model.order import ComboType, OrderStatus


@dataclass(frozen=True)
class PlaceOrderCommand:
    design_id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    father: str = NOT_ORDERING
    mother: str = NOT_ORDERING
    sons: Sequence[str] = ()
    daughters: Sequence[str] = ()
    customer_email: str = ""
    country_code: str = "+91"


@dataclass(frozen=True)
class OrderReceipt:
    order_id: str
    design_id: str
    combo_type: ComboType
    selected_sizes: Mapping[str, str]
    status: OrderStatus


class PlaceOrderUseCase(Protocol):
    def place_order(self, command: PlaceOrderCommand) -> Result[OrderReceipt, StoreError]: ...
