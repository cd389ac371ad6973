"""Staleness detection for item handles.

A cursor owns one guard for its whole life. Every handle it issues carries
the token returned by ``issue``; the token stays valid until the cursor
issues the next handle, the handle is consumed, or the cursor closes.

``GenerationGuard`` turns use of a superseded handle into ``StaleItemError``.
``NullGuard`` skips the bookkeeping entirely: misuse of a stale handle then
reads or writes whatever now sits at the handle's index, which is undefined
behaviour from the caller's point of view.
"""

from __future__ import annotations

from typing import Optional, Protocol

from inplace_iter.runtime import telemetry
from inplace_iter.runtime.config import get_config


class StaleItemError(RuntimeError):
    """Raised when an item handle is used after it was superseded."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        token: int | None = None,
        active: int | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.token = token
        self.active = active


class LifetimeGuard(Protocol):
    enabled: bool

    def issue(self) -> int:
        ...

    def invalidate_previous(self) -> None:
        ...

    def check(self, token: int, *, index: int) -> None:
        ...


class GenerationGuard:
    """Generation counter; only the most recently issued token is live."""

    __slots__ = ("_generation", "_active", "_owner")

    enabled = True

    def __init__(self, owner: str = "cursor") -> None:
        self._generation = 0
        self._active: Optional[int] = None
        self._owner = owner

    @property
    def generation(self) -> int:
        return self._generation

    def issue(self) -> int:
        self._generation += 1
        self._active = self._generation
        return self._generation

    def invalidate_previous(self) -> None:
        self._active = None

    def check(self, token: int, *, index: int) -> None:
        if token == self._active:
            return
        telemetry.record_event(
            "guard.stale_item",
            level="error",
            data={
                "cursor": self._owner,
                "index": index,
                "token": token,
                "active": self._active,
            },
        )
        raise StaleItemError(
            "This iterator item is no longer valid!",
            index=index,
            token=token,
            active=self._active,
        )


class NullGuard:
    """Unchecked mode: issues a constant token and never faults."""

    __slots__ = ()

    enabled = False

    def issue(self) -> int:
        return 0

    def invalidate_previous(self) -> None:
        pass

    def check(self, token: int, *, index: int) -> None:
        pass


def make_guard(enabled: Optional[bool] = None, *, owner: str = "cursor") -> LifetimeGuard:
    """Pick the guard implementation once, when the cursor is built."""

    if enabled is None:
        enabled = get_config().lifetime_guard
    if enabled:
        return GenerationGuard(owner)
    return NullGuard()


__all__ = [
    "GenerationGuard",
    "LifetimeGuard",
    "NullGuard",
    "StaleItemError",
    "make_guard",
]
