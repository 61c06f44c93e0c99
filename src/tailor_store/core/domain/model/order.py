from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Mapping

from tailor_store.core.domain.model.family import FamilySelection


class ComboType(str, Enum):
    FULL_FAMILY = "F-M-S-D"
    FATHER_SON = "F-S"
    MOTHER_DAUGHTER = "M-D"
    COUPLE = "F-M"
    CUSTOM = "Custom"


class OrderStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


@dataclass(frozen=True)
class CustomerContact:
    name: str
    phone: str
    address: str
    email: str = ""
    country_code: str = "+91"


@dataclass(frozen=True)
class OrderDraft:
    """What a customer submits; the store assigns id, timestamp and status."""

    design_id: str
    combo_type: ComboType
    selected_sizes: Mapping[str, str]
    customer: CustomerContact


@dataclass(frozen=True)
class Order:
    id: str
    design_id: str
    combo_type: ComboType
    selected_sizes: FamilySelection
    customer: CustomerContact
    status: OrderStatus = OrderStatus.PENDING
    created_at: int = 0

    def with_status(self, status: OrderStatus) -> "Order":
        return replace(self, status=status)
