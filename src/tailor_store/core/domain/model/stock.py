from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Mapping, Tuple

from tailor_store.core.domain.model.errors import InvalidConstraint


class Category(str, Enum):
    MEN = "men"
    WOMEN = "women"
    BOYS = "boys"
    GIRLS = "girls"

    @staticmethod
    def parse(value: str) -> "Category":
        try:
            return Category(value.strip().lower())
        except ValueError:
            raise InvalidConstraint("unknown category", value=value) from None


ADULT_SIZES: Tuple[str, ...] = ("M", "L", "XL", "XXL", "3XL")
KIDS_SIZES: Tuple[str, ...] = (
    "0-1",
    "1-2",
    "2-3",
    "3-4",
    "4-5",
    "5-6",
    "6-7",
    "7-8",
    "9-10",
    "11-12",
    "13-14",
)

SIZES_BY_CATEGORY: Mapping[Category, Tuple[str, ...]] = {
    Category.MEN: ADULT_SIZES,
    Category.WOMEN: ADULT_SIZES,
    Category.BOYS: KIDS_SIZES,
    Category.GIRLS: KIDS_SIZES,
}


def sizes_for(category: Category) -> Tuple[str, ...]:
    return SIZES_BY_CATEGORY[category]


def check_size(category: Category | str, size: str) -> Category:
    """Validate a (category, size) cell and return the category as an enum."""
    cat = category if isinstance(category, Category) else Category.parse(category)
    if size not in SIZES_BY_CATEGORY[cat]:
        raise InvalidConstraint(f"size not offered for {cat.value}", value=size)
    return cat


class StockMatrix:
    """Per-size stock counts for the four cuts of one design.

    Every cell of the fixed vocabulary is always present; counts never go
    below zero.
    """

    __slots__ = ("_counts",)

    def __init__(self, counts: Mapping[Category, Mapping[str, int]] | None = None):
        self._counts: Dict[Category, Dict[str, int]] = {
            cat: {size: 0 for size in sizes} for cat, sizes in SIZES_BY_CATEGORY.items()
        }
        for cat, cells in (counts or {}).items():
            for size, n in cells.items():
                self.set(cat, size, n)

    @classmethod
    def empty(cls) -> "StockMatrix":
        return cls()

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping[str, int]] | None) -> "StockMatrix":
        """Build from the stored `{"men": {"M": 3, ...}, ...}` shape.

        Missing categories or sizes load as zero.
        """
        counts: Dict[Category, Dict[str, int]] = {}
        for key, cells in (raw or {}).items():
            counts[Category.parse(key)] = {str(s): int(n) for s, n in (cells or {}).items()}
        return cls(counts)

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        return {cat.value: dict(cells) for cat, cells in self._counts.items()}

    def copy(self) -> "StockMatrix":
        return StockMatrix(self._counts)

    def get(self, category: Category, size: str) -> int:
        cat = check_size(category, size)
        return self._counts[cat][size]

    def set(self, category: Category, size: str, count: int) -> None:
        cat = check_size(category, size)
        self._counts[cat][size] = max(0, int(count))

    def adjust(self, category: Category, size: str, delta: int) -> int:
        self.set(category, size, self.get(category, size) + delta)
        return self.get(category, size)

    def has_any_stock(self, category: Category) -> bool:
        cat = category if isinstance(category, Category) else Category.parse(category)
        return any(n > 0 for n in self._counts[cat].values())

    def total_units(self) -> int:
        return sum(n for cells in self._counts.values() for n in cells.values())

    def cells(self) -> Iterator[Tuple[Category, str, int]]:
        for cat, cells in self._counts.items():
            for size, n in cells.items():
                yield cat, size, n

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StockMatrix):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        stocked = {f"{c.value}.{s}": n for c, s, n in self.cells() if n}
        return f"StockMatrix({stocked})"
