from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass, field, replace
from enum import Enum

from tailor_store.core.domain.model.stock import StockMatrix

DEFAULT_LABEL = "PREMIUM DESIGN"
UNKNOWN_DESIGN_NAME = "Unknown Design"

_ID_ALPHABET = string.ascii_lowercase + string.digits


class ChildType(str, Enum):
    NONE = "none"
    BOYS = "boys"
    GIRLS = "girls"
    UNISEX = "unisex"


@dataclass(frozen=True)
class Design:
    id: str
    name: str
    color: str
    fabric: str
    image_url: str
    stock: StockMatrix = field(default_factory=StockMatrix.empty)
    child_type: ChildType = ChildType.NONE
    label: str | None = None
    created_at: int = 0

    def with_stock(self, stock: StockMatrix) -> "Design":
        return replace(self, stock=stock)

    def matches_text(self, needle: str, *, fields: tuple[str, ...] = ("name", "color", "fabric")) -> bool:
        needle = needle.strip().lower()
        if not needle:
            return True
        return any(needle in str(getattr(self, f)).lower() for f in fields)


def new_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))


def now_millis() -> int:
    return int(time.time() * 1000)
