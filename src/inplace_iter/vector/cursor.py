"""Mutation cursor: visit every element once, removing or taking as you go.

Removal is a swap-removal. The last element moves into the freed slot and
the vector shrinks by one, so the cursor must look at the same index again
before moving on. Removing the trailing element never swaps.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Optional, TypeVar

from inplace_iter.runtime import telemetry

from .guard import make_guard
from .items import RemovableItem, RemovableItemMut, TakeableItem, TakeableItemMut
from .sequence import BackingSequence, InplaceVector

T = TypeVar("T")

_CURSOR_IDS = itertools.count(1)


@dataclass(slots=True)
class CursorStats:
    """Snapshot of a cursor's progress."""

    visited: int
    removed: int
    index: Optional[int]
    closed: bool


class InplaceVecCursor(Generic[T]):
    """Single-owner iterator over a backing sequence.

    Only the most recent handle is usable. Handles go stale when the next
    one is issued, when they remove or take their element, and when the
    cursor closes. Reaching the end closes the cursor.
    """

    name_prefix = "inplace"

    def __init__(
        self,
        seq: BackingSequence[T] | InplaceVector[T],
        *,
        item_type: Any = RemovableItem,
        guard: Optional[bool] = None,
        name: Optional[str] = None,
    ) -> None:
        self._closed = True
        self.name = name or f"{self.name_prefix}-{next(_CURSOR_IDS)}"
        self._guard = make_guard(guard, owner=self.name)
        if isinstance(seq, InplaceVector):
            self._vector: Optional[InplaceVector[T]] = seq
            self._data: BackingSequence[T] = seq._lease(self.name)
        else:
            self._vector = None
            self._data = seq
        self._item_type = item_type
        self._index: Optional[int] = None
        self._removed = False
        self._exhausted = False
        self._visited = 0
        self._removals = 0
        self._closed = False
        telemetry.record_event(
            "cursor.open",
            level="debug",
            data={
                "cursor": self.name,
                "item": item_type.kind,
                "length": len(self._data),
                "guarded": self._guard.enabled,
            },
        )

    # -- iteration --------------------------------------------------------

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        item = self.advance()
        if item is None:
            raise StopIteration
        return item

    def advance(self) -> Optional[Any]:
        """Issue the handle for the next position, or ``None`` when done."""

        self._guard.invalidate_previous()
        if self._exhausted:
            return None
        if self._index is None:
            index = 0
        elif self._removed:
            # the element swapped in by the last removal still needs a visit
            index = self._index
        else:
            index = self._index + 1
        self._removed = False
        self._index = index
        if index < self._limit():
            self._visited += 1
            return self._item_type(self, index, self._guard.issue())
        self._exhaust()
        return None

    def _limit(self) -> int:
        return len(self._data)

    def _exhaust(self) -> None:
        self.close()

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def guarded(self) -> bool:
        return self._guard.enabled

    def stats(self) -> CursorStats:
        return CursorStats(
            visited=self._visited,
            removed=self._removals,
            index=self._index,
            closed=self._closed,
        )

    # -- handle back-channel ----------------------------------------------

    def _get(self, token: int, index: int) -> T:
        self._guard.check(token, index=index)
        return self._data[index]

    def _set(self, token: int, index: int, value: T) -> None:
        self._guard.check(token, index=index)
        self._data[index] = value

    def _take(self, token: int, index: int) -> T:
        self._guard.check(token, index=index)
        # remove/take consume the handle
        self._guard.invalidate_previous()
        self._removed = True
        self._removals += 1
        return self._swap_remove(index)

    def _swap_remove(self, index: int) -> T:
        data = self._data
        last = data.pop()
        if index == len(data):
            return last
        value = data[index]
        data[index] = last
        return value

    # -- lifecycle --------------------------------------------------------

    def close(self) -> None:
        """Retire the outstanding handle and give the vector back."""

        if self._closed:
            return
        self._release_resources()
        telemetry.record_event(
            "cursor.close",
            level="debug",
            data={
                "cursor": self.name,
                "visited": self._visited,
                "removed": self._removals,
                "length": len(self._data),
            },
        )

    def _release_resources(self) -> None:
        self._closed = True
        self._exhausted = True
        self._guard.invalidate_previous()
        if self._vector is not None:
            self._vector._release(self.name)

    def __enter__(self) -> "InplaceVecCursor[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def __del__(self) -> None:
        if not getattr(self, "_closed", True):
            self._release_resources()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"index={self._index}"
        return f"{type(self).__name__}({self.name!r}, {state})"


def removable_iter(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> InplaceVecCursor[T]:
    """Iterate with handles that can ``remove()`` their element."""

    return InplaceVecCursor(seq, item_type=RemovableItem, guard=guard)


def removable_iter_mut(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> InplaceVecCursor[T]:
    return InplaceVecCursor(seq, item_type=RemovableItemMut, guard=guard)


def takeable_iter(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> InplaceVecCursor[T]:
    """Iterate with handles that can ``take()`` their element out."""

    return InplaceVecCursor(seq, item_type=TakeableItem, guard=guard)


def takeable_iter_mut(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> InplaceVecCursor[T]:
    return InplaceVecCursor(seq, item_type=TakeableItemMut, guard=guard)


__all__ = [
    "CursorStats",
    "InplaceVecCursor",
    "removable_iter",
    "removable_iter_mut",
    "takeable_iter",
    "takeable_iter_mut",
]
