"""Unit tests for views, cells and borrow tracking."""

from __future__ import annotations

import threading

import pytest

from ez_over import BorrowError, BorrowExpired, Box, Cell, SharedView, UniqueRef, over_mut, over_ref
from ez_over.borrow import BorrowTracker, borrows, lend_shared, revoke


class Point:
    def __init__(self, x: int) -> None:
        self.x = x

    def __hash__(self) -> int:
        return hash(self.x)


def test_shared_view_forwards_reads() -> None:
    """Reads, comparisons and operators reach the target."""
    view = SharedView([1, 2])

    assert view == [1, 2]
    assert [1, 2] == view
    assert len(view) == 2
    assert 2 in view
    assert view[0] == 1
    assert view + [3] == [1, 2, 3]
    assert list(view) == [1, 2]
    assert str(view) == "[1, 2]"
    assert isinstance(view, list)


def test_shared_view_forwards_attributes_and_hash() -> None:
    """Plain objects expose their attributes read-only."""
    point = Point(3)
    view = SharedView(point)

    assert view.x == 3
    assert hash(view) == hash(point)


def test_shared_view_rejects_writes() -> None:
    """Assignment, deletion and in-place operators raise."""
    items = [1, 2]
    view = SharedView(items)

    with pytest.raises(BorrowError):
        view[0] = 5
    with pytest.raises(BorrowError):
        del view[0]
    with pytest.raises(BorrowError):
        view += [3]
    with pytest.raises(BorrowError):
        view.extend([3])
    assert items == [1, 2]


def test_shared_view_rejects_attribute_assignment() -> None:
    """Attributes of the target cannot be set through the view."""
    point = Point(1)
    view = SharedView(point)

    with pytest.raises(BorrowError):
        view.x = 2
    assert point.x == 1


def test_shared_view_allows_non_mutating_dict_methods() -> None:
    """Only well-known mutators are blocked."""
    view = SharedView({"a": 1})

    assert view.get("a") == 1
    with pytest.raises(BorrowError):
        view.update(b=2)


def test_revoked_view_raises_on_use() -> None:
    """A revoked view refuses every access but still has a repr."""
    view = SharedView([1])
    revoke(view)

    with pytest.raises(BorrowExpired):
        len(view)
    with pytest.raises(BorrowExpired):
        view.count(1)
    assert repr(view) == "<expired SharedView>"


def test_lend_shared_revokes_on_exit() -> None:
    """The context manager releases its view even when the body raises."""
    with pytest.raises(KeyError):
        with lend_shared({"a": 1}) as view:
            kept = view
            raise KeyError("a")

    with pytest.raises(BorrowExpired):
        kept.keys()


def test_cell_get_set_replace() -> None:
    """Cell behaves as a simple mutable binding."""
    cell = Cell(1)
    cell.set(2)

    assert cell.replace(3) == 2
    assert cell == Cell(3)
    assert repr(cell) == "Cell(3)"


def test_unique_ref_value_property() -> None:
    """The value property reads and writes the owner's slot."""
    cell = Cell("a")
    ref = UniqueRef(cell)

    ref.value = ref.value + "b"

    assert cell.get() == "ab"


def test_unique_borrow_inside_shared_borrow_is_rejected() -> None:
    """An object lent as shared cannot be lent as unique at the same time."""
    items = [1]

    with pytest.raises(BorrowError):
        over_ref(items, lambda _: over_mut(items, lambda xs: xs.append(2)))
    assert items == [1]


def test_shared_borrow_inside_unique_borrow_is_rejected() -> None:
    """No other borrow of an object is allowed while it is uniquely borrowed."""
    items = [1, 2]

    with pytest.raises(BorrowError):
        over_mut(items, lambda xs: over_ref(items, len))
    assert not borrows.is_borrowed(items)


def test_nested_unique_borrow_is_rejected() -> None:
    """A unique borrow cannot be taken twice."""
    items = [1]

    with pytest.raises(BorrowError):
        over_mut(items, lambda xs: over_mut(items, lambda ys: ys.append(2)))
    assert items == [1]


def test_nested_shared_borrows_are_allowed() -> None:
    """Any number of shared borrows may coexist."""
    items = [1, 2]

    assert over_ref(items, lambda a: over_ref(items, lambda b: len(a) + len(b))) == 4


def test_unique_borrow_excludes_other_threads() -> None:
    """Another thread cannot borrow an object while it is uniquely borrowed."""
    items = [1]
    errors = []

    def read_from_thread(_):
        def target():
            try:
                over_ref(items, len)
            except BorrowError as e:
                errors.append(e)

        thread = threading.Thread(target=target)
        thread.start()
        thread.join()

    over_mut(items, read_from_thread)

    assert len(errors) == 1
    assert not borrows.is_borrowed(items)


def test_tracker_ignores_immutable_values() -> None:
    """Immutable values are never recorded."""
    tracker = BorrowTracker()

    with tracker.unique(5):
        with tracker.shared(5):
            assert not tracker.is_borrowed(5)


def test_tracker_releases_state_after_borrow() -> None:
    """Borrow state is dropped once the last borrow ends."""
    tracker = BorrowTracker()
    items = []

    with tracker.shared(items):
        assert tracker.is_borrowed(items)
        with pytest.raises(BorrowError):
            tracker.acquire_unique(items)

    assert not tracker.is_borrowed(items)


class Resource:
    def release(self) -> str:
        return "released"


def test_shared_view_forwards_release_to_target() -> None:
    """Target methods named like view internals are still reachable."""
    assert over_ref(Resource(), lambda r: r.release()) == "released"


def test_shared_view_blocks_deref_mut() -> None:
    """A shared view never hands out a mutable view of its target."""
    box = Box(5)

    with pytest.raises(BorrowError):
        over_ref(box, lambda b: b.deref_mut())
    assert box == Box(5)
