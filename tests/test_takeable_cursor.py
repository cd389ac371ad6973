from __future__ import annotations

import pytest

from inplace_iter import takeable_iter, takeable_iter_mut
from inplace_iter.vector import TakeableItem


def test_takeable_iterator_sequence() -> None:
    values = [1, 2, 3, 4, 5, 6, 7, 8]
    cursor = takeable_iter(values)

    assert cursor.advance().get() == 1
    assert cursor.advance().get() == 2
    assert cursor.advance().get() == 3
    assert cursor.advance().get() == 4
    assert cursor.advance().take() == 5
    assert cursor.advance().get() == 8
    assert cursor.advance().get() == 6
    assert cursor.advance().take() == 7
    assert cursor.advance() is None

    assert values == [1, 2, 3, 4, 8, 6]


def test_take_values_greater_than_three() -> None:
    numbers = [1, 2, 3, 4, 5]
    total = 0
    for item in takeable_iter(numbers):
        if item.get() > 3:
            total += item.take()

    assert total == 9
    assert len(numbers) == 3
    assert sorted(numbers) == [1, 2, 3]


def test_take_returns_exact_object() -> None:
    first, second, third = object(), object(), object()
    values = [first, second, third]
    taken = [item.take() for item in takeable_iter(values) if item.get() is second]

    assert taken == [second]
    assert taken[0] is second
    assert values == [first, third]


def test_take_long_names() -> None:
    names = ["Alice", "Bob", "Charlie"]
    long_names = []
    for item in takeable_iter(names):
        if len(item.get()) > 4:
            long_names.append(item.take())

    assert long_names == ["Alice", "Charlie"]
    assert names == ["Bob"]


@pytest.mark.parametrize("position", [0, 2, 4])
def test_take_matches_remove_structurally(position: int) -> None:
    from inplace_iter import removable_iter

    taken_from = [10, 11, 12, 13, 14]
    removed_from = list(taken_from)

    for item in takeable_iter(taken_from):
        if item.index == position and item.get() == 10 + position:
            assert item.take() == 10 + position
    for item in removable_iter(removed_from):
        if item.index == position and item.get() == 10 + position:
            item.remove()

    assert taken_from == removed_from
    assert len(taken_from) == 4


def test_take_everything_preserves_multiset() -> None:
    values = [3, 1, 4, 1, 5, 9, 2, 6]
    taken = [item.take() for item in takeable_iter(list(values))]

    assert sorted(taken) == sorted(values)


def test_takeable_mut_updates_kept_values() -> None:
    values = [1, 2, 3, 4]
    evens = []
    for item in takeable_iter_mut(values):
        if item.get() % 2 == 0:
            evens.append(item.take())
        else:
            item.update(lambda value: -value)

    assert sorted(evens) == [2, 4]
    assert sorted(values) == [-3, -1]


def test_takeable_items_cannot_remove() -> None:
    item = takeable_iter([1]).advance()

    assert isinstance(item, TakeableItem)
    assert not hasattr(item, "remove")


def test_empty_takeable() -> None:
    assert takeable_iter([]).advance() is None
