from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.design import DEFAULT_LABEL, Design
from tailor_store.core.domain.model.errors import StoreError


@dataclass(frozen=True)
class RegisterDesignCommand:
    name: str
    color: str
    fabric: str
    image_url: str
    child_type: str = "none"
    label: str | None = DEFAULT_LABEL
    stock: Mapping[str, Mapping[str, int]] | None = None


@dataclass(frozen=True)
class UpdateDesignCommand:
    """Partial edit; None leaves a field as it is."""

    design_id: str
    name: str | None = None
    color: str | None = None
    fabric: str | None = None
    image_url: str | None = None
    child_type: str | None = None
    label: str | None = None
    stock: Mapping[str, Mapping[str, int]] | None = None


@dataclass(frozen=True)
class SetStockCommand:
    design_id: str
    category: str
    size: str
    count: int


@dataclass(frozen=True)
class AdjustStockCommand:
    design_id: str
    category: str
    size: str
    delta: int


class ManageDesignsUseCase(Protocol):
    def register(self, command: RegisterDesignCommand) -> Result[Design, StoreError]: ...

    def update_details(self, command: UpdateDesignCommand) -> Result[Design, StoreError]: ...

    def set_stock(self, command: SetStockCommand) -> Result[Design, StoreError]: ...

    def adjust_stock(self, command: AdjustStockCommand) -> Result[Design, StoreError]: ...

    def delete(self, design_id: str) -> Result[None, StoreError]: ...

    def list_designs(self, search: str = "") -> Result[Sequence[Design], StoreError]: ...
