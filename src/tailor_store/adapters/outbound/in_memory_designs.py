from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Sequence

from returns.result import Failure, Result, Success

from tailor_store.adapters.outbound.listeners import Listeners
from tailor_store.core.domain.model.design import Design
from tailor_store.core.domain.model.errors import (
    DesignNotFound,
    PersistenceError,
    StoreError,
)
from tailor_store.core.ports.outbound.changes import Change, ChangeKind, Unsubscribe
from tailor_store.core.ports.outbound.designs import DesignRepository


@dataclass
class InMemoryDesignRepository(DesignRepository):
    _store: Dict[str, Design] = field(default_factory=dict)
    fail_writes: bool = False
    _listeners: Listeners[Design] = field(default_factory=Listeners)

    def subscribe(self, callback) -> Unsubscribe:
        return self._listeners.subscribe(callback)

    def load_designs(self) -> Result[Sequence[Design], StoreError]:
        return Success(_newest_first(self._store.values()))

    def get_design(self, design_id: str) -> Result[Design, StoreError]:
        design = self._store.get(design_id)
        if design is None:
            return Failure(DesignNotFound(message="design not found", design_id=design_id))
        return Success(design)

    def save_design(self, design: Design) -> Result[Design, StoreError]:
        if self.fail_writes:
            return Failure(PersistenceError(message="design store is unavailable"))
        kind = ChangeKind.UPDATE if design.id in self._store else ChangeKind.INSERT
        # stored copies must not share a mutable matrix with the caller
        stored = design.with_stock(design.stock.copy())
        self._store[design.id] = stored
        self._listeners.emit(Change(kind, design.id, stored))
        return Success(stored)

    def delete_design(self, design_id: str) -> Result[None, StoreError]:
        if self.fail_writes:
            return Failure(PersistenceError(message="design store is unavailable"))
        if self._store.pop(design_id, None) is None:
            return Failure(DesignNotFound(message="design not found", design_id=design_id))
        self._listeners.emit(Change(ChangeKind.DELETE, design_id))
        return Success(None)


def _newest_first(designs) -> Sequence[Design]:
    # stable sort over reversed insertion order: later inserts win ties
    return tuple(sorted(reversed(list(designs)), key=lambda d: d.created_at, reverse=True))
