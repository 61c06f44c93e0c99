from __future__ import annotations

from typing import Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.errors import StoreError


class DesignRepository(Protocol):
    def load_designs(self) -> Result[Sequence[Design], StoreError]:
        """Whole catalog, newest first."""
        ...

    def get_design(self, design_id: str) -> Result[Design, StoreError]: ...

    def save_design(self, design: Design) -> Result[Design, StoreError]:
        """Upsert by id."""
        ...

    def delete_design(self, design_id: str) -> Result[None, StoreError]: ...
