from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Mapping, Protocol, Sequence

from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.design import ChildType, Design
from tailor_store.core.domain.model.errors import InvalidConstraint, StoreError
from tailor_store.core.domain.model.order import ComboType
from tailor_store.core.domain.model.stock import Category
from tailor_store.core.domain.service.combo import categories_for
from tailor_store.core.domain.service.size_filter import SizeConstraint, matches
from tailor_store.core.ports.inbound.browse_catalog import (
    BrowseCatalogUseCase,
    BrowseMode,
    BrowseRequest,
)
from tailor_store.shared.logger import get_logger

logger = get_logger("catalog")

_KIDS = frozenset({Category.BOYS, Category.GIRLS})


class DesignSource(Protocol):
    def load_designs(self) -> Result[Sequence[Design], StoreError]: ...


def query(designs: Iterable[Design], constraint: SizeConstraint) -> List[Design]:
    """Designs satisfying `constraint`, in input order."""
    if constraint.is_empty:
        return []
    return [d for d in designs if matches(d, constraint).matched]


def constraint_for(request: BrowseRequest) -> SizeConstraint:
    picked: Mapping[Category, Sequence[str]] = {
        Category.MEN: (request.father,),
        Category.WOMEN: (request.mother,),
        Category.BOYS: tuple(request.sons),
        Category.GIRLS: tuple(request.daughters),
    }
    mode = request.mode
    if mode is BrowseMode.ALL:
        active: frozenset[Category] = frozenset()
    elif mode is BrowseMode.BOYS:
        active = frozenset({Category.BOYS})
    elif mode is BrowseMode.GIRLS:
        active = frozenset({Category.GIRLS})
    elif mode is BrowseMode.UNISEX:
        active = _KIDS
    else:
        active = categories_for(ComboType(mode.value))

    # outside ALL, sizes picked for members the mode does not cover are ignored
    sizes = picked if mode is BrowseMode.ALL else {c: picked[c] for c in active}
    return SizeConstraint.build(sizes=sizes, active=active)


def _for_design(constraint: SizeConstraint, mode: BrowseMode, design: Design) -> SizeConstraint:
    if mode is BrowseMode.UNISEX and design.child_type is ChildType.UNISEX:
        return replace(constraint, stock_waived=_KIDS)
    return constraint


def filter_catalog(designs: Iterable[Design], request: BrowseRequest) -> List[Design]:
    constraint = constraint_for(request)
    if constraint.is_empty:
        return []
    return [
        d
        for d in designs
        if d.matches_text(request.search)
        and matches(d, _for_design(constraint, request.mode, d)).matched
    ]


@dataclass(frozen=True)
class CatalogQueryDeps:
    designs: DesignSource


@dataclass(frozen=True)
class CatalogQueryService(BrowseCatalogUseCase):
    deps: CatalogQueryDeps

    def browse(self, request: BrowseRequest) -> Result[Sequence[Design], StoreError]:
        try:
            constraint = constraint_for(request)
        except InvalidConstraint as exc:
            return Failure(exc)

        if constraint.is_empty:
            logger.debug("browse without any selection, mode=%s", request.mode.value)
            return Success(())

        return self.deps.designs.load_designs().map(
            lambda designs: tuple(filter_catalog(designs, request))
        )
