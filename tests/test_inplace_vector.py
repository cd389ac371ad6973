from __future__ import annotations

import gc

import pytest

from inplace_iter import BorrowError, InplaceVector, StaleItemError
from inplace_iter.vector import truncate


def test_vector_behaves_like_list_when_free() -> None:
    vector = InplaceVector([1, 2])
    vector.append(3)
    vector.extend([4, 5])
    vector[0] = 10

    assert len(vector) == 5
    assert vector[0] == 10
    assert list(vector) == [10, 2, 3, 4, 5]
    assert vector.pop() == 5
    assert vector == [10, 2, 3, 4]
    assert vector == InplaceVector([10, 2, 3, 4])
    assert vector.truncate(2) == 2
    assert vector.to_list() == [10, 2]


def test_vector_is_locked_while_iterating() -> None:
    vector = InplaceVector([1, 2, 3])
    for item in vector.removable_iter():
        with pytest.raises(BorrowError):
            len(vector)
        with pytest.raises(BorrowError):
            vector.append(4)
        with pytest.raises(BorrowError) as excinfo:
            vector.removable_iter()
        assert excinfo.value.owner is not None
        if item.get() == 2:
            item.remove()

    assert not vector.leased
    assert vector == [1, 3]


def test_vector_lease_released_on_break() -> None:
    vector = InplaceVector([1, 2, 3])
    with vector.takeable_iter() as cursor:
        for item in cursor:
            assert item.take() == 1
            break

    assert not vector.leased
    assert vector.to_list() == [3, 2]


def test_vector_entry_points() -> None:
    vector = InplaceVector([1, 2, 3, 4, 5])

    for item in vector.removable_iter_mut():
        item.set(item.get() * 2)
    total = sum(item.take() for item in vector.takeable_iter_mut() if item.get() > 6)
    for item in vector.removable_iter():
        if item.get() == 2:
            item.remove()

    assert total == 18
    assert sorted(vector.to_list()) == [4, 6]


def test_vector_confirm_cursor_holds_lease_until_decided() -> None:
    vector = InplaceVector([1, 2, 3, 4, 5])
    cursor = vector.removable_confirm_iter()
    for item in cursor.iter():
        if item.get() % 2 == 0:
            item.remove()

    with pytest.raises(BorrowError):
        vector.to_list()
    assert "leased" in repr(vector)

    cursor.confirm()

    assert sorted(vector.to_list()) == [1, 3, 5]


def test_vector_confirm_mut_cancel() -> None:
    vector = InplaceVector(["a", "b"])
    cursor = vector.removable_confirm_iter_mut()
    for item in cursor.iter():
        item.update(str.upper)
        item.remove()
    cursor.cancel()

    assert sorted(vector.to_list()) == ["A", "B"]


def test_truncate_helper_reports_dropped_count() -> None:
    values = [1, 2, 3]

    assert truncate(values, 5) == 0
    assert truncate(values, 1) == 2
    assert values == [1]


def test_vector_lease_released_when_loop_is_abandoned() -> None:
    vector = InplaceVector([1, 2, 3])
    for item in vector.removable_iter():
        item.remove()
        break
    gc.collect()

    assert not vector.leased
    assert len(vector) == 2
    assert vector.to_list() == [3, 2]
    with pytest.raises(StaleItemError):
        item.get()


def test_unguarded_handle_outliving_cursor_is_stale() -> None:
    vector = InplaceVector(["a", "b"])
    for item in vector.takeable_iter(guard=False):
        break
    gc.collect()

    assert vector.to_list() == ["a", "b"]
    with pytest.raises(StaleItemError):
        item.take()
