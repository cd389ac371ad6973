"""In-place iteration with O(1) removal and take.

Iterate a vector and, for the element currently visited, either drop it or
move it out without a second pass. Removal swaps the last element into the
freed slot, so element order is not preserved except for the tail.

    numbers = [1, 2, 3, 4, 5]
    for item in removable_iter(numbers):
        if item.get() % 2 == 0:
            item.remove()
    assert numbers == [1, 5, 3]
"""

from .vector import (
    BorrowError,
    ConfirmState,
    CursorStateError,
    InplaceVector,
    RemovableItem,
    RemovableItemMut,
    StaleItemError,
    TakeableItem,
    TakeableItemMut,
    removable_confirm_iter,
    removable_confirm_iter_mut,
    removable_iter,
    removable_iter_mut,
    takeable_iter,
    takeable_iter_mut,
)

__all__ = [
    "BorrowError",
    "ConfirmState",
    "CursorStateError",
    "InplaceVector",
    "RemovableItem",
    "RemovableItemMut",
    "StaleItemError",
    "TakeableItem",
    "TakeableItemMut",
    "removable_confirm_iter",
    "removable_confirm_iter_mut",
    "removable_iter",
    "removable_iter_mut",
    "takeable_iter",
    "takeable_iter_mut",
    "runtime",
    "vector",
]

__version__ = "0.1.0"
