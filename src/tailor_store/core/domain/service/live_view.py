from __future__ import annotations

from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from returns.result import Failure, Result, Success

from tailor_store.core.domain.model.errors import StoreError
from tailor_store.core.ports.outbound.changes import Change, ChangeKind, Unsubscribe
from tailor_store.shared.logger import get_logger

logger = get_logger("live")

T = TypeVar("T")


def apply_change(
    items: Sequence[T],
    change: Change[T],
    key: Callable[[T], str],
    newest_first: Optional[Callable[[T], int]] = None,
) -> List[T]:
    """Return `items` with one change applied as a full-record replacement.

    Inserts and updates of an unknown key add the record; updates of a known
    key replace it in place; deletes drop it.
    """
    kept = [it for it in items if key(it) != change.key]
    if change.kind is ChangeKind.DELETE or change.record is None:
        return kept

    if change.kind is ChangeKind.UPDATE and len(kept) != len(items):
        return [change.record if key(it) == change.key else it for it in items]

    kept.insert(0, change.record)
    if newest_first is not None:
        kept.sort(key=newest_first, reverse=True)
    return kept


class LiveCollection(Generic[T]):
    """In-memory copy of a store collection kept current by its change feed.

    Readers call `snapshot()`; the collection is primed once from `loader`
    and then only follows pushes.
    """

    def __init__(
        self,
        loader: Callable[[], Result[Sequence[T], StoreError]],
        key: Callable[[T], str],
        newest_first: Optional[Callable[[T], int]] = None,
    ):
        self._loader = loader
        self._key = key
        self._order = newest_first
        self._items: List[T] = []
        self._primed = False
        self._unsubscribe: Optional[Unsubscribe] = None

    def follow(self, subscribe: Callable[[Callable[[Change[T]], None]], Unsubscribe]) -> "LiveCollection[T]":
        self._unsubscribe = subscribe(self.apply)
        return self

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def apply(self, change: Change[T]) -> None:
        if not self._primed:
            # the first load will include this change anyway
            return
        self._items = apply_change(self._items, change, self._key, self._order)
        logger.debug("applied %s %s, %d records", change.kind.value, change.key, len(self._items))

    def refresh(self) -> Result[Sequence[T], StoreError]:
        loaded = self._loader()
        if isinstance(loaded, Success):
            self._items = list(loaded.unwrap())
            self._primed = True
        return loaded

    def snapshot(self) -> Result[Sequence[T], StoreError]:
        if not self._primed:
            loaded = self.refresh()
            if isinstance(loaded, Failure):
                return loaded
        return Success(tuple(self._items))
