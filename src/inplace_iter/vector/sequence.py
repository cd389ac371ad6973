"""Backing sequence protocol and the lease-aware ``InplaceVector`` container."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    TypeVar,
)

if TYPE_CHECKING:
    from .confirm import RemovableConfirmCursor
    from .cursor import InplaceVecCursor

T = TypeVar("T")


class BackingSequence(Protocol[T]):
    """Contiguous, resizable storage the cursors operate on. ``list`` fits."""

    def __len__(self) -> int:
        ...

    def __getitem__(self, index: int) -> T:
        ...

    def __setitem__(self, index: int, value: T) -> None:
        ...

    def __delitem__(self, index: slice) -> None:
        ...

    def pop(self) -> T:
        ...

    def append(self, value: T) -> None:
        ...


def swap(seq: BackingSequence[T], i: int, j: int) -> None:
    seq[i], seq[j] = seq[j], seq[i]


def truncate(seq: BackingSequence[T], length: int) -> int:
    """Shrink ``seq`` to ``length`` and return how many elements were dropped."""

    dropped = len(seq) - length
    if dropped <= 0:
        return 0
    del seq[length:]
    return dropped


class BorrowError(RuntimeError):
    """Raised when a leased vector is touched outside of its cursor."""

    def __init__(self, message: str, *, owner: str | None = None) -> None:
        super().__init__(message)
        self.owner = owner


class InplaceVector(Generic[T]):
    """List-backed vector that hands its storage to one cursor at a time.

    While a cursor holds the lease every public accessor raises
    ``BorrowError``; the lease returns when the cursor closes.
    """

    __slots__ = ("_items", "_owner")

    def __init__(self, items: Optional[Iterable[T]] = None) -> None:
        self._items: List[T] = list(items or ())
        self._owner: Optional[str] = None

    # -- lease management -------------------------------------------------

    @property
    def leased(self) -> bool:
        return self._owner is not None

    def _lease(self, owner: str) -> List[T]:
        self._ensure_free()
        self._owner = owner
        return self._items

    def _release(self, owner: str) -> None:
        if self._owner == owner:
            self._owner = None

    def _ensure_free(self) -> None:
        if self._owner is not None:
            raise BorrowError(
                f"vector is exclusively held by cursor '{self._owner}'",
                owner=self._owner,
            )

    # -- cursor entry points ----------------------------------------------

    def removable_iter(self, *, guard: bool | None = None) -> "InplaceVecCursor[T]":
        from .cursor import removable_iter

        return removable_iter(self, guard=guard)

    def removable_iter_mut(
        self, *, guard: bool | None = None
    ) -> "InplaceVecCursor[T]":
        from .cursor import removable_iter_mut

        return removable_iter_mut(self, guard=guard)

    def takeable_iter(self, *, guard: bool | None = None) -> "InplaceVecCursor[T]":
        from .cursor import takeable_iter

        return takeable_iter(self, guard=guard)

    def takeable_iter_mut(self, *, guard: bool | None = None) -> "InplaceVecCursor[T]":
        from .cursor import takeable_iter_mut

        return takeable_iter_mut(self, guard=guard)

    def removable_confirm_iter(
        self, *, guard: bool | None = None
    ) -> "RemovableConfirmCursor[T]":
        from .confirm import removable_confirm_iter

        return removable_confirm_iter(self, guard=guard)

    def removable_confirm_iter_mut(
        self, *, guard: bool | None = None
    ) -> "RemovableConfirmCursor[T]":
        from .confirm import removable_confirm_iter_mut

        return removable_confirm_iter_mut(self, guard=guard)

    # -- list-like surface ------------------------------------------------

    def __len__(self) -> int:
        self._ensure_free()
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        self._ensure_free()
        return self._items[index]

    def __setitem__(self, index: int, value: T) -> None:
        self._ensure_free()
        self._items[index] = value

    def __iter__(self) -> Iterator[T]:
        self._ensure_free()
        return iter(list(self._items))

    def __eq__(self, other: object) -> bool:
        self._ensure_free()
        if isinstance(other, InplaceVector):
            other._ensure_free()
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        if self._owner is not None:
            return f"InplaceVector(<leased by {self._owner}>)"
        return f"InplaceVector({self._items!r})"

    def append(self, value: T) -> None:
        self._ensure_free()
        self._items.append(value)

    def extend(self, values: Iterable[T]) -> None:
        self._ensure_free()
        self._items.extend(values)

    def pop(self) -> T:
        self._ensure_free()
        return self._items.pop()

    def truncate(self, length: int) -> int:
        self._ensure_free()
        return truncate(self._items, length)

    def to_list(self) -> List[T]:
        self._ensure_free()
        return list(self._items)


__all__ = [
    "BackingSequence",
    "BorrowError",
    "InplaceVector",
    "swap",
    "truncate",
]
