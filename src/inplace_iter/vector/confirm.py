"""Deferred-commit cursor: mark removals now, apply or discard them later.

Removed elements are swapped behind a shrinking logical boundary instead of
being popped. ``confirm()`` truncates the vector to that boundary;
``cancel()`` leaves the physical length alone, so the removed elements come
back, in whatever order the swaps left them. Closing the cursor without
either call is an implicit cancel.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, TypeVar

from inplace_iter.runtime import telemetry

from .cursor import InplaceVecCursor
from .items import RemovableItem, RemovableItemMut
from .sequence import BackingSequence, InplaceVector, swap, truncate

T = TypeVar("T")


class ConfirmState(str, Enum):
    OPEN = "open"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class CursorStateError(RuntimeError):
    """Raised when a finished deferred-commit cursor is used again."""

    def __init__(self, message: str, *, state: ConfirmState | None = None) -> None:
        super().__init__(message)
        self.state = state


class RemovableConfirmCursor(InplaceVecCursor[T]):
    """Cursor whose removals stay pending until ``confirm``/``cancel``.

    A pass ends at the logical boundary without closing the cursor; call
    ``iter()`` to walk the surviving prefix again.
    """

    name_prefix = "confirm"

    def __init__(
        self,
        seq: BackingSequence[T] | InplaceVector[T],
        *,
        item_type: Any = RemovableItem,
        guard: Optional[bool] = None,
        name: Optional[str] = None,
    ) -> None:
        super().__init__(seq, item_type=item_type, guard=guard, name=name)
        self._logical_size = len(self._data)
        self._state = ConfirmState.OPEN

    @property
    def state(self) -> ConfirmState:
        return self._state

    @property
    def logical_size(self) -> int:
        return self._logical_size

    @property
    def pending_removals(self) -> int:
        if self._state is not ConfirmState.OPEN:
            return 0
        return len(self._data) - self._logical_size

    def iter(self) -> "RemovableConfirmCursor[T]":
        """Restart traversal over elements not yet marked for removal.

        Values changed through mutable handles in earlier passes are seen
        as changed.
        """

        self._ensure_open("iter")
        self._guard.invalidate_previous()
        self._index = None
        self._removed = False
        self._exhausted = False
        return self

    def advance(self) -> Optional[Any]:
        self._ensure_open("advance")
        return super().advance()

    def _limit(self) -> int:
        return min(self._logical_size, len(self._data))

    def _exhaust(self) -> None:
        self._exhausted = True

    def _swap_remove(self, index: int) -> T:
        self._logical_size -= 1
        boundary = self._logical_size
        value = self._data[index]
        if index < boundary:
            swap(self._data, index, boundary)
        return value

    def confirm(self) -> int:
        """Drop every element marked for removal; return how many went."""

        self._ensure_open("confirm")
        with telemetry.span(
            "confirm::truncate",
            component="confirm",
            metadata={"cursor": self.name, "logical_size": self._logical_size},
        ) as handle:
            dropped = truncate(self._data, self._logical_size)
            handle.add_metadata("dropped", dropped)
        self._finish(ConfirmState.CONFIRMED)
        return dropped

    def cancel(self) -> int:
        """Forget the pending removals; return how many elements came back."""

        self._ensure_open("cancel")
        restored = self.pending_removals
        with telemetry.span(
            "confirm::cancel",
            component="confirm",
            metadata={"cursor": self.name, "logical_size": self._logical_size},
        ):
            telemetry.record_event(
                "confirm.cancel",
                data={"cursor": self.name, "restored": restored, "implicit": False},
            )
            self._finish(ConfirmState.CANCELLED)
        return restored

    def close(self) -> None:
        if self._closed:
            return
        if self._state is ConfirmState.OPEN:
            telemetry.record_event(
                "confirm.cancel",
                level="debug",
                data={
                    "cursor": self.name,
                    "restored": self.pending_removals,
                    "implicit": True,
                },
            )
            self._state = ConfirmState.CANCELLED
        super().close()

    def _finish(self, state: ConfirmState) -> None:
        self._state = state
        super().close()

    def _ensure_open(self, operation: str) -> None:
        if self._state is not ConfirmState.OPEN:
            raise CursorStateError(
                f"cannot {operation} cursor '{self.name}': already {self._state.value}",
                state=self._state,
            )


def removable_confirm_iter(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> RemovableConfirmCursor[T]:
    """Deferred-commit cursor with read-only removable handles."""

    return RemovableConfirmCursor(seq, item_type=RemovableItem, guard=guard)


def removable_confirm_iter_mut(
    seq: BackingSequence[T] | InplaceVector[T], *, guard: Optional[bool] = None
) -> RemovableConfirmCursor[T]:
    return RemovableConfirmCursor(seq, item_type=RemovableItemMut, guard=guard)


__all__ = [
    "ConfirmState",
    "CursorStateError",
    "RemovableConfirmCursor",
    "removable_confirm_iter",
    "removable_confirm_iter_mut",
]
