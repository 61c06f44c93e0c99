from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from tailor_store.core.domain.model.family import (
    FamilySelection,
    category_for_role,
    ordered_members,
)
from tailor_store.core.domain.model.stock import Category, StockMatrix


class SkipReason(str, Enum):
    INSUFFICIENT_STOCK = "InsufficientStock"


@dataclass(frozen=True)
class Deducted:
    role: str
    category: Category
    size: str


@dataclass(frozen=True)
class Skipped:
    role: str
    category: Category
    size: str
    reason: SkipReason = SkipReason.INSUFFICIENT_STOCK


Outcome = Union[Deducted, Skipped]


@dataclass(frozen=True)
class Reconciliation:
    matrix: StockMatrix
    outcomes: Tuple[Outcome, ...]

    @property
    def deducted(self) -> Tuple[Deducted, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, Deducted))

    @property
    def skipped(self) -> Tuple[Skipped, ...]:
        return tuple(o for o in self.outcomes if isinstance(o, Skipped))

    @property
    def changed(self) -> bool:
        return bool(self.deducted)


def reconcile(matrix: StockMatrix, selection: FamilySelection) -> Reconciliation:
    """Take one unit per ordered member out of a copy of `matrix`.

    Members whose size is out of stock are reported as Skipped and leave the
    cell untouched. The input matrix is not modified; N/A members produce no
    outcome. Calling this twice for the same order double-deducts, so the
    caller must only reconcile an order on its pending -> accepted transition.
    """
    working = matrix.copy()
    outcomes: list[Outcome] = []

    for role, size in ordered_members(selection):
        cat = category_for_role(role)
        if working.get(cat, size) > 0:
            working.adjust(cat, size, -1)
            outcomes.append(Deducted(role, cat, size))
        else:
            outcomes.append(Skipped(role, cat, size))

    return Reconciliation(matrix=working, outcomes=tuple(outcomes))
