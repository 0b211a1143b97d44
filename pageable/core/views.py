"""Live views and cursors over the items of a PageableList."""

from __future__ import annotations

import operator
from collections.abc import Iterator, MutableSequence, Sequence
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from pageable.utils.exceptions import ConcurrentModification

if TYPE_CHECKING:
    from pageable.core.collection import PageableList

T = TypeVar("T")


class _Tracked:
    """Remembers the owner's modification state and detects changes made elsewhere."""

    _root: PageableList[Any]

    def _sync(self) -> None:
        self._expected_mod_count = self._root._mod_count
        self._expected_len = len(self._root._items)

    def _check(self) -> None:
        if (
            self._root._mod_count != self._expected_mod_count
            or len(self._root._items) != self._expected_len
        ):
            raise ConcurrentModification(
                f"{type(self).__name__} used after its list was structurally modified"
            )


class SubList(_Tracked, MutableSequence[T], Generic[T]):
    """Live view over a contiguous range of a PageableList's items.

    Writes through the view land in the parent list and are visible through
    it immediately. Structural changes to the parent that are not made
    through the view invalidate the view.
    """

    def __init__(
        self,
        root: PageableList[T],
        start: int,
        stop: int,
        parent: Optional[SubList[T]] = None,
    ) -> None:
        self._root = root
        self._parent = parent
        self._offset = (parent._offset if parent is not None else 0) + start
        self._size = stop - start
        self._sync()

    def _resize(self, delta: int) -> None:
        """Propagate a size change to this view and every enclosing view."""
        node: Optional[SubList[T]] = self
        while node is not None:
            node._size += delta
            node._sync()
            node = node._parent

    def _position(self, index: int) -> int:
        index = operator.index(index)
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError("sublist index out of range")
        return self._offset + index

    def _window(self) -> list[T]:
        return self._root._items[self._offset:self._offset + self._size]

    def _replace_window(self, window: list[T]) -> None:
        self._root._items[self._offset:self._offset + self._size] = window
        delta = len(window) - self._size
        if delta:
            self._root._modified()
            self._resize(delta)

    def __len__(self) -> int:
        self._check()
        return self._size

    def __getitem__(self, index):
        self._check()
        if isinstance(index, slice):
            return self._window()[index]
        return self._root._items[self._position(index)]

    def __setitem__(self, index, value) -> None:
        self._check()
        if isinstance(index, slice):
            window = self._window()
            window[index] = value
            self._replace_window(window)
            return
        self._root._items[self._position(index)] = value

    def __delitem__(self, index) -> None:
        self._check()
        if isinstance(index, slice):
            window = self._window()
            del window[index]
            self._replace_window(window)
            return
        del self._root._items[self._position(index)]
        self._root._modified()
        self._resize(-1)

    def insert(self, index: int, value: T) -> None:
        self._check()
        # Same clamping as list.insert
        index = operator.index(index)
        if index < 0:
            index = max(index + self._size, 0)
        index = min(index, self._size)
        self._root._items.insert(self._offset + index, value)
        self._root._modified()
        self._resize(1)

    def clear(self) -> None:
        del self[:]

    def sublist(self, start: int, stop: int) -> SubList[T]:
        """Return a live view over ``start:stop`` of this view."""
        self._check()
        _check_range(start, stop, self._size)
        return SubList(self._root, start, stop, parent=self)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SubList({list(self)!r})"


class ListCursor(_Tracked, Iterator[T], Generic[T]):
    """Bidirectional iterator that can modify the list while traversing it.

    ``remove()`` and ``set()`` act on the element last returned by
    ``next()`` or ``previous()``; ``add()`` inserts before the cursor.
    """

    def __init__(self, root: PageableList[T], index: int = 0) -> None:
        if not 0 <= index <= len(root._items):
            raise IndexError(f"cursor index out of range: {index}")
        self._root = root
        self._cursor = index
        self._last = -1
        self._sync()

    def has_next(self) -> bool:
        return self._cursor < len(self._root._items)

    def has_previous(self) -> bool:
        return self._cursor > 0

    @property
    def next_index(self) -> int:
        return self._cursor

    @property
    def previous_index(self) -> int:
        return self._cursor - 1

    def __next__(self) -> T:
        self._check()
        if self._cursor >= len(self._root._items):
            raise StopIteration
        item = self._root._items[self._cursor]
        self._last = self._cursor
        self._cursor += 1
        return item

    def previous(self) -> T:
        """Step back and return the element before the cursor."""
        self._check()
        if self._cursor <= 0:
            raise IndexError("cursor is at the start of the list")
        self._cursor -= 1
        self._last = self._cursor
        return self._root._items[self._cursor]

    def remove(self) -> None:
        """Remove the element last returned by next() or previous()."""
        if self._last < 0:
            raise RuntimeError("remove() requires a preceding next() or previous()")
        self._check()
        del self._root._items[self._last]
        self._root._modified()
        if self._last < self._cursor:
            self._cursor -= 1
        self._last = -1
        self._sync()

    def set(self, value: T) -> None:
        """Replace the element last returned by next() or previous()."""
        if self._last < 0:
            raise RuntimeError("set() requires a preceding next() or previous()")
        self._check()
        self._root._items[self._last] = value

    def add(self, value: T) -> None:
        """Insert value immediately before the cursor."""
        self._check()
        self._root._items.insert(self._cursor, value)
        self._root._modified()
        self._cursor += 1
        self._last = -1
        self._sync()


def _check_range(start: int, stop: int, size: int) -> None:
    if start < 0:
        raise IndexError(f"start index {start} < 0")
    if stop > size:
        raise IndexError(f"stop index {stop} > size {size}")
    if start > stop:
        raise IndexError(f"start index {start} > stop index {stop}")
