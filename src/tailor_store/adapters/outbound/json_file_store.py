from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from pydantic import ValidationError as RecordError
from returns.result import Failure, Result, Success

from tailor_store.adapters.outbound.listeners import Listeners
from tailor_store.adapters.outbound.records import DesignRecord, OrderRecord
from tailor_store.core.domain.model.design import Design, new_id, now_millis
from tailor_store.core.domain.model.errors import (
    AlreadyProcessed,
    DesignNotFound,
    InvalidConstraint,
    OrderNotFound,
    PersistenceError,
    StoreError,
)
from tailor_store.core.domain.model.order import Order, OrderDraft, OrderStatus
from tailor_store.core.ports.outbound.changes import Change, ChangeKind, Unsubscribe
from tailor_store.core.ports.outbound.designs import DesignRepository
from tailor_store.core.ports.outbound.orders import OrderRepository
from tailor_store.shared.logger import get_logger

logger = get_logger("store.json")


def _read_rows(path: Path) -> Result[List[Dict[str, Any]], StoreError]:
    if not path.exists():
        return Success([])
    try:
        rows = json.loads(path.read_text(encoding="utf-8") or "[]")
    except (OSError, json.JSONDecodeError) as exc:
        return Failure(PersistenceError(message=f"cannot read {path.name}: {exc}"))
    if not isinstance(rows, list):
        return Failure(PersistenceError(message=f"{path.name} must hold a JSON list"))
    return Success(rows)


def _write_rows(path: Path, rows: List[Dict[str, Any]]) -> Result[None, StoreError]:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(rows, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(tmp, path)
    except OSError as exc:
        return Failure(PersistenceError(message=f"cannot write {path.name}: {exc}"))
    return Success(None)


@dataclass
class JsonDesignRepository(DesignRepository):
    """Designs kept as a JSON list, newest first, one file per collection.

    Every call re-reads the file, so two processes sharing the file see each
    other's writes (last writer wins).
    """

    path: Path
    _listeners: Listeners[Design] = field(default_factory=Listeners)

    def subscribe(self, callback) -> Unsubscribe:
        return self._listeners.subscribe(callback)

    def _load(self) -> Result[List[Design], StoreError]:
        rows = _read_rows(self.path)
        if isinstance(rows, Failure):
            return rows
        try:
            return Success([DesignRecord.model_validate(r).to_domain() for r in rows.unwrap()])
        except (RecordError, InvalidConstraint, ValueError) as exc:
            return Failure(PersistenceError(message=f"corrupt design record: {exc}"))

    def _store(self, designs: Sequence[Design]) -> Result[None, StoreError]:
        ordered = sorted(designs, key=lambda d: d.created_at, reverse=True)
        return _write_rows(
            self.path, [DesignRecord.of(d).model_dump(by_alias=True) for d in ordered]
        )

    def load_designs(self) -> Result[Sequence[Design], StoreError]:
        return self._load().map(
            lambda ds: tuple(sorted(ds, key=lambda d: d.created_at, reverse=True))
        )

    def get_design(self, design_id: str) -> Result[Design, StoreError]:
        loaded = self._load()
        if isinstance(loaded, Failure):
            return loaded
        for design in loaded.unwrap():
            if design.id == design_id:
                return Success(design)
        return Failure(DesignNotFound(message="design not found", design_id=design_id))

    def save_design(self, design: Design) -> Result[Design, StoreError]:
        loaded = self._load()
        if isinstance(loaded, Failure):
            return loaded
        designs = loaded.unwrap()
        exists = any(d.id == design.id for d in designs)
        if exists:
            designs = [design if d.id == design.id else d for d in designs]
        else:
            designs = [design, *designs]

        written = self._store(designs)
        if isinstance(written, Failure):
            return written
        kind = ChangeKind.UPDATE if exists else ChangeKind.INSERT
        self._listeners.emit(Change(kind, design.id, design))
        return Success(design)

    def delete_design(self, design_id: str) -> Result[None, StoreError]:
        loaded = self._load()
        if isinstance(loaded, Failure):
            return loaded
        designs = loaded.unwrap()
        kept = [d for d in designs if d.id != design_id]
        if len(kept) == len(designs):
            return Failure(DesignNotFound(message="design not found", design_id=design_id))

        written = self._store(kept)
        if isinstance(written, Failure):
            return written
        self._listeners.emit(Change(ChangeKind.DELETE, design_id))
        return Success(None)


@dataclass
class JsonOrderRepository(OrderRepository):
    path: Path
    _listeners: Listeners[Order] = field(default_factory=Listeners)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def subscribe(self, callback) -> Unsubscribe:
        return self._listeners.subscribe(callback)

    def _load(self) -> Result[List[Order], StoreError]:
        rows = _read_rows(self.path)
        if isinstance(rows, Failure):
            return rows
        try:
            return Success([OrderRecord.model_validate(r).to_domain() for r in rows.unwrap()])
        except (RecordError, ValueError) as exc:
            return Failure(PersistenceError(message=f"corrupt order record: {exc}"))

    def _store(self, orders: Sequence[Order]) -> Result[None, StoreError]:
        return _write_rows(
            self.path, [OrderRecord.of(o).model_dump(by_alias=True) for o in orders]
        )

    def load_orders(self) -> Result[Sequence[Order], StoreError]:
        # rows are kept newest first already; the sort is stable for ties
        return self._load().map(
            lambda orders: tuple(sorted(orders, key=lambda o: o.created_at, reverse=True))
        )

    def get_order(self, order_id: str) -> Result[Order, StoreError]:
        loaded = self._load()
        if isinstance(loaded, Failure):
            return loaded
        for order in loaded.unwrap():
            if order.id == order_id:
                return Success(order)
        return Failure(OrderNotFound(message="order not found", order_id=order_id))

    def create_order(self, draft: OrderDraft) -> Result[Order, StoreError]:
        loaded = self._load()
        if isinstance(loaded, Failure):
            return loaded
        order = Order(
            id=new_id(),
            design_id=draft.design_id,
            combo_type=draft.combo_type,
            selected_sizes=dict(draft.selected_sizes),
            customer=draft.customer,
            status=OrderStatus.PENDING,
            created_at=now_millis(),
        )
        written = self._store([order, *loaded.unwrap()])
        if isinstance(written, Failure):
            return written
        self._listeners.emit(Change(ChangeKind.INSERT, order.id, order))
        logger.debug("order %s appended to %s", order.id, self.path)
        return Success(order)

    def set_order_status(
        self,
        order_id: str,
        status: OrderStatus,
        expected: OrderStatus | None = None,
    ) -> Result[Order, StoreError]:
        # serializes read-check-write within this process only
        with self._lock:
            loaded = self._load()
            if isinstance(loaded, Failure):
                return loaded
            orders = loaded.unwrap()
            current = next((o for o in orders if o.id == order_id), None)
            if current is None:
                return Failure(OrderNotFound(message="order not found", order_id=order_id))
            if expected is not None and current.status is not expected:
                return Failure(
                    AlreadyProcessed(
                        message=f"order is no longer {expected.value}",
                        order_id=order_id,
                        status=current.status.value,
                    )
                )

            updated = current.with_status(status)
            written = self._store([updated if o.id == order_id else o for o in orders])
            if isinstance(written, Failure):
                return written
        self._listeners.emit(Change(ChangeKind.UPDATE, order_id, updated))
        return Success(updated)
