from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol, Sequence

from returns.result import Result

from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.domain.model.family import NOT_ORDERING


class BrowseMode(str, Enum):
    ALL = "ALL"
    FULL_FAMILY = "F-M-S-D"
    FATHER_SON = "F-S"
    MOTHER_DAUGHTER = "M-D"
    COUPLE = "F-M"
    BOYS = "boys"
    GIRLS = "girls"
    UNISEX = "unisex"


@dataclass(frozen=True)
class BrowseRequest:
    mode: BrowseMode = BrowseMode.ALL
    father: str = NOT_ORDERING
    mother: str = NOT_ORDERING
    sons: Sequence[str] = ()
    daughters: Sequence[str] = ()
    search: str = ""


class BrowseCatalogUseCase(Protocol):
    def browse(self, request: BrowseRequest) -> Result[Sequence[Design], StoreError]: ...
