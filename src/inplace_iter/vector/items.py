"""Item handles issued by the mutation cursors.

A handle is only ``(cursor, index, token)``; every operation goes back
through the cursor, which checks the token against its guard first. The
cursor is held weakly, so a handle never keeps its cursor or a leased
vector alive; once the cursor is gone the handle is stale.
"""

from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from .guard import StaleItemError

if TYPE_CHECKING:
    from .cursor import InplaceVecCursor

T = TypeVar("T")


class _InplaceItem(Generic[T]):
    __slots__ = ("_owner", "_index", "_token")

    kind = "item"

    def __init__(self, cursor: "InplaceVecCursor[T]", index: int, token: int) -> None:
        self._owner = weakref.ref(cursor)
        self._index = index
        self._token = token

    @property
    def _cursor(self) -> "InplaceVecCursor[T]":
        cursor = self._owner()
        if cursor is None:
            raise StaleItemError(
                "This iterator item is no longer valid!",
                index=self._index,
                token=self._token,
            )
        return cursor

    @property
    def index(self) -> int:
        return self._index

    def get(self) -> T:
        """Return the element at this handle's position."""

        return self._cursor._get(self._token, self._index)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self._index}, token={self._token})"


class _MutableAccess(_InplaceItem[T]):
    __slots__ = ()

    def set(self, value: T) -> None:
        self._cursor._set(self._token, self._index, value)

    def update(self, func: Callable[[T], T]) -> T:
        """Replace the element with ``func(element)`` and return the result."""

        value = func(self._cursor._get(self._token, self._index))
        self._cursor._set(self._token, self._index, value)
        return value


class RemovableItem(_InplaceItem[T]):
    """Read-only view that can drop its element from the vector."""

    __slots__ = ()

    kind = "removable"

    def remove(self) -> None:
        """Remove the element, consuming this handle.

        The last element takes its place, so the cursor visits the same
        index again next.
        """

        self._cursor._take(self._token, self._index)


class RemovableItemMut(_MutableAccess[T], RemovableItem[T]):
    __slots__ = ()

    kind = "removable_mut"


class TakeableItem(_InplaceItem[T]):
    """Read-only view that can move its element out of the vector."""

    __slots__ = ()

    kind = "takeable"

    def take(self) -> T:
        return self._cursor._take(self._token, self._index)


class TakeableItemMut(_MutableAccess[T], TakeableItem[T]):
    __slots__ = ()

    kind = "takeable_mut"


__all__ = [
    "RemovableItem",
    "RemovableItemMut",
    "TakeableItem",
    "TakeableItemMut",
]
