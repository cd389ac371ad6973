"""Mutation-aware iteration over contiguous, resizable sequences."""

from .confirm import (
    ConfirmState,
    CursorStateError,
    RemovableConfirmCursor,
    removable_confirm_iter,
    removable_confirm_iter_mut,
)
from .cursor import (
    CursorStats,
    InplaceVecCursor,
    removable_iter,
    removable_iter_mut,
    takeable_iter,
    takeable_iter_mut,
)
from .guard import GenerationGuard, LifetimeGuard, NullGuard, StaleItemError, make_guard
from .items import RemovableItem, RemovableItemMut, TakeableItem, TakeableItemMut
from .sequence import BackingSequence, BorrowError, InplaceVector, swap, truncate

__all__ = [
    "BackingSequence",
    "BorrowError",
    "ConfirmState",
    "CursorStateError",
    "CursorStats",
    "GenerationGuard",
    "InplaceVecCursor",
    "InplaceVector",
    "LifetimeGuard",
    "NullGuard",
    "RemovableConfirmCursor",
    "RemovableItem",
    "RemovableItemMut",
    "StaleItemError",
    "TakeableItem",
    "TakeableItemMut",
    "make_guard",
    "removable_confirm_iter",
    "removable_confirm_iter_mut",
    "removable_iter",
    "removable_iter_mut",
    "swap",
    "takeable_iter",
    "takeable_iter_mut",
    "truncate",
]
