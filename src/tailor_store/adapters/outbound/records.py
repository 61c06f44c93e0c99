"""Stored row shapes for designs and orders.

Column names follow the hosted table layout (`imageurl`, `childtype`,
`createdat`, `designid`, ...), so the same records can be pushed to a
document store or kept in a local JSON file.
"""
from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from tailor_store.core.domain.model.design import ChildType, Design
from tailor_store.core.domain.model.order import (
    ComboType,
    CustomerContact,
    Order,
    OrderStatus,
)
from tailor_store.core.domain.model.stock import StockMatrix


class DesignRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    color: str = ""
    fabric: str = ""
    image_url: str = Field("", alias="imageurl")
    inventory: Dict[str, Dict[str, int]] = Field(default_factory=dict)
    child_type: Optional[str] = Field(None, alias="childtype")
    label: Optional[str] = None
    created_at: int = Field(0, alias="createdat")

    @classmethod
    def of(cls, design: Design) -> "DesignRecord":
        return cls(
            id=design.id,
            name=design.name,
            color=design.color,
            fabric=design.fabric,
            image_url=design.image_url,
            inventory=design.stock.to_dict(),
            child_type=design.child_type.value,
            label=design.label,
            created_at=design.created_at,
        )

    def to_domain(self) -> Design:
        return Design(
            id=self.id,
            name=self.name,
            color=self.color,
            fabric=self.fabric,
            image_url=self.image_url,
            stock=StockMatrix.from_dict(self.inventory),
            child_type=ChildType(self.child_type or ChildType.NONE.value),
            label=self.label,
            created_at=self.created_at,
        )


class CustomerRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    phone: str
    address: str
    email: str = ""
    country_code: str = Field("+91", alias="countrycode")


class OrderRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    design_id: str = Field(alias="designid")
    combo_type: str = Field(alias="combotype")
    selected_sizes: Dict[str, str] = Field(default_factory=dict, alias="selectedsizes")
    customer: Optional[CustomerRecord] = None
    status: str = OrderStatus.PENDING.value
    created_at: int = Field(0, alias="createdat")

    @classmethod
    def of(cls, order: Order) -> "OrderRecord":
        c = order.customer
        return cls(
            id=order.id,
            design_id=order.design_id,
            combo_type=order.combo_type.value,
            selected_sizes=dict(order.selected_sizes),
            customer=CustomerRecord(
                name=c.name,
                phone=c.phone,
                address=c.address,
                email=c.email,
                country_code=c.country_code,
            ),
            status=order.status.value,
            created_at=order.created_at,
        )

    def to_domain(self) -> Order:
        c = self.customer or CustomerRecord(name="", phone="", address="")
        return Order(
            id=self.id,
            design_id=self.design_id,
            combo_type=ComboType(self.combo_type),
            selected_sizes=dict(self.selected_sizes),
            customer=CustomerContact(
                name=c.name,
                phone=c.phone,
                address=c.address,
                email=c.email,
                country_code=c.country_code,
            ),
            status=OrderStatus(self.status),
            created_at=self.created_at,
        )
