from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Mapping, Tuple

from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.family import is_ordering
from tailor_store.core.domain.model.stock import Category, check_size


@dataclass(frozen=True)
class SizeConstraint:
    """Which categories a browse request cares about, and which exact sizes.

    `sizes` may list several sizes for one category (two sons needing
    different sizes). `N/A` entries are ignored. Categories in `stock_waived`
    skip the "has any stock" requirement; requested sizes are still checked.
    """

    sizes: Mapping[Category, Tuple[str, ...]] = field(default_factory=dict)
    active: FrozenSet[Category] = frozenset()
    stock_waived: FrozenSet[Category] = frozenset()

    @staticmethod
    def build(
        sizes: Mapping[Category, Iterable[str]] | None = None,
        active: Iterable[Category] = (),
        stock_waived: Iterable[Category] = (),
    ) -> "SizeConstraint":
        """Normalize raw picker values; unknown sizes raise InvalidConstraint."""
        requested: dict[Category, Tuple[str, ...]] = {}
        for key, values in (sizes or {}).items():
            cat = Category.parse(key)
            wanted = tuple(s for s in values if is_ordering(s))
            for s in wanted:
                check_size(cat, s)
            if wanted:
                requested[cat] = wanted
        return SizeConstraint(
            sizes=requested,
            active=frozenset(Category.parse(c) for c in active),
            stock_waived=frozenset(Category.parse(c) for c in stock_waived),
        )

    def requested(self, category: Category) -> Tuple[str, ...]:
        return tuple(s for s in self.sizes.get(category, ()) if is_ordering(s))

    def relevant(self) -> Tuple[Category, ...]:
        return tuple(c for c in Category if c in self.active or self.requested(c))

    @property
    def is_empty(self) -> bool:
        return not self.relevant()


@dataclass(frozen=True)
class SizeAvailability:
    category: Category
    size: str
    in_stock: bool


@dataclass(frozen=True)
class MatchResult:
    matched: bool
    categories: Mapping[Category, bool] = field(default_factory=dict)
    availability: Tuple[SizeAvailability, ...] = ()

    def sold_out(self) -> Tuple[SizeAvailability, ...]:
        return tuple(a for a in self.availability if not a.in_stock)


NO_MATCH = MatchResult(matched=False)


def matches(design: Design, constraint: SizeConstraint) -> MatchResult:
    relevant = constraint.relevant()
    if not relevant:
        return NO_MATCH

    stock = design.stock
    verdicts: dict[Category, bool] = {}
    availability: list[SizeAvailability] = []

    for cat in relevant:
        wanted = constraint.requested(cat)
        if wanted:
            ok = True
            for size in wanted:
                in_stock = stock.get(cat, size) > 0
                availability.append(SizeAvailability(cat, size, in_stock))
                ok = ok and in_stock
        elif cat in constraint.stock_waived:
            ok = True
        else:
            ok = stock.has_any_stock(cat)
        verdicts[cat] = ok

    return MatchResult(
        matched=all(verdicts.values()),
        categories=verdicts,
        availability=tuple(availability),
    )
