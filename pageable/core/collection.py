from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableSequence
from typing import Any, Callable, Generic, Optional, TypeVar, overload

from pageable.core.paging import Page, PagingDescriptor
from pageable.core.views import ListCursor, SubList, _check_range
from pageable.utils.exceptions import InvalidArgument
from pageable.utils.types import HASH_MULTIPLIER, Links

T = TypeVar("T")

_HASH_MASK = 0xFFFFFFFF


class PageableList(MutableSequence[T], Generic[T]):
    """One page of a paged result set that behaves like a list.

    Every sequence operation acts on the items of the current page only.
    ``paging`` and ``links`` carry what is needed to find the next page and
    are never modified by the list.
    """

    def __init__(
        self,
        items: Optional[Iterable[T]] = (),
        paging: Optional[PagingDescriptor] = None,
        links: Optional[Links] = None,
    ) -> None:
        """Wrap the items of one page.

        Args:
            items: Items of the current page. A list is wrapped as-is, any
                other iterable is copied.
            paging: Page description, might be None
            links: Links of the page, might be None

        Raises:
            InvalidArgument: If items is None
        """
        if items is None:
            raise InvalidArgument("items must not be None")
        self._items: list[T] = items if isinstance(items, list) else list(items)
        self._paging = paging
        self._links = links
        self._mod_count = 0

    @classmethod
    def empty(cls) -> PageableList[T]:
        """Return an empty list with no next page."""
        return cls()

    def _modified(self) -> None:
        """Record a structural change, invalidating open cursors and views."""
        self._mod_count += 1

    # --- Pagination ---

    @property
    def paging(self) -> Optional[PagingDescriptor]:
        """Description of the current page, might be None."""
        return self._paging

    @property
    def links(self) -> Optional[Links]:
        """Links of the current page, might be None."""
        return self._links

    @property
    def next_page(self) -> Optional[Page]:
        """Identifier of the next page, None on the last page."""
        return None if self._paging is None else self._paging.next

    def has_next_page(self) -> bool:
        """Whether there are more pages after this one."""
        return self.next_page is not None

    @property
    def current_page_items(self) -> list[T]:
        """The items of the current page (the backing list itself)."""
        return self._items

    def collect_all(self, fetch_page: Optional[Callable[[Page], PageableList[T]]] = None) -> list[T]:
        """Return the items of this page, or of all pages when fetch_page is given.

        Without a fetch function this returns the current page's items, the
        same list as ``current_page_items``. With one, the remaining pages
        are fetched in order and a new list holding every item is returned.
        """
        if fetch_page is None:
            return self._items

        from pageable.core.aggregate import collect_pages

        return collect_pages(self, fetch_page)

    # --- Sequence contract ---

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[T]:
        return reversed(self._items)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> list[T]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            size = len(self._items)
            self._items[index] = value
            if len(self._items) != size:
                self._modified()
            return
        self._items[index] = value

    def __delitem__(self, index) -> None:
        del self._items[index]
        self._modified()

    def insert(self, index: int, value: T) -> None:
        self._items.insert(index, value)
        self._modified()

    def append(self, value: T) -> None:
        self._items.append(value)
        self._modified()

    def extend(self, values: Iterable[T]) -> None:
        if values is self:
            values = list(values)
        self._items.extend(values)
        self._modified()

    def insert_all(self, index: int, values: Iterable[T]) -> bool:
        """Insert values at index, keeping their order. Returns True if anything was added."""
        values = list(values)
        if not 0 <= index <= len(self._items):
            raise IndexError(f"insert index out of range: {index}")
        self._items[index:index] = values
        if values:
            self._modified()
        return bool(values)

    def pop(self, index: int = -1) -> T:
        item = self._items.pop(index)
        self._modified()
        return item

    def remove(self, value: T) -> None:
        self._items.remove(value)
        self._modified()

    def remove_all(self, values: Iterable[Any]) -> bool:
        """Remove every occurrence of each of values. Returns True if the list changed."""
        return self._filter(lambda item, unwanted: item not in unwanted, values)

    def retain_all(self, values: Iterable[Any]) -> bool:
        """Keep only items contained in values. Returns True if the list changed."""
        return self._filter(lambda item, wanted: item in wanted, values)

    def _filter(self, keep: Callable[[Any, list[Any]], bool], values: Iterable[Any]) -> bool:
        reference = list(values)
        kept = [item for item in self._items if keep(item, reference)]
        if len(kept) == len(self._items):
            return False
        self._items[:] = kept
        self._modified()
        return True

    def contains_all(self, values: Iterable[Any]) -> bool:
        return all(value in self._items for value in values)

    def clear(self) -> None:
        self._items.clear()
        self._modified()

    def index(self, value: Any, start: int = 0, stop: int | None = None) -> int:
        if stop is None:
            return self._items.index(value, start)
        return self._items.index(value, start, stop)

    def last_index(self, value: Any) -> int:
        """Return the index of the last occurrence of value.

        Raises:
            ValueError: If value is not present
        """
        for i in range(len(self._items) - 1, -1, -1):
            if self._items[i] == value:
                return i
        raise ValueError(f"{value!r} is not in list")

    def count(self, value: Any) -> int:
        return self._items.count(value)

    def reverse(self) -> None:
        self._items.reverse()
        self._modified()

    def sort(self, *, key: Callable[[T], Any] | None = None, reverse: bool = False) -> None:
        self._items.sort(key=key, reverse=reverse)
        self._modified()

    def cursor(self, index: int = 0) -> ListCursor[T]:
        """Return a cursor starting before the item at index."""
        return ListCursor(self, index)

    def sublist(self, start: int, stop: int) -> SubList[T]:
        """Return a live view over the items ``start:stop``."""
        _check_range(start, stop, len(self._items))
        return SubList(self, start, stop)

    def to_list(self) -> list[T]:
        """Return a snapshot copy of the current page's items."""
        return list(self._items)

    def to_tuple(self) -> tuple[T, ...]:
        """Return an immutable snapshot of the current page's items."""
        return tuple(self._items)

    # --- Equality ---

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return (
            self._items == other._items
            and self._paging == other._paging
            and self._links == other._links
        )

    # Mutable, so not usable as a dict key (same as list)
    __hash__ = None  # type: ignore[assignment]

    def content_hash(self) -> int:
        """Hash of items, paging and links; equal lists have equal content hashes."""
        result = _hash_value(self._items)
        result = _mix(result, _hash_value(self._paging) if self._paging is not None else 0)
        result = _mix(result, _hash_value(self._links) if self._links is not None else 0)
        return result

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(items={self._items!r}, "
            f"paging={self._paging!r}, links={self._links!r})"
        )


def _to_signed(value: int) -> int:
    value &= _HASH_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _mix(result: int, value: int) -> int:
    return _to_signed(HASH_MULTIPLIER * result + value)


def _hash_value(value: Any) -> int:
    """Hash a value, including the unhashable containers JSON decoding produces."""
    if isinstance(value, Mapping):
        # Order of keys is irrelevant
        return _to_signed(sum(_hash_value(k) ^ _hash_value(v) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        result = 1
        for item in value:
            result = _mix(result, _hash_value(item))
        return result
    if isinstance(value, (set, frozenset)):
        return _to_signed(sum(_hash_value(item) for item in value))
    return _to_signed(hash(value))
