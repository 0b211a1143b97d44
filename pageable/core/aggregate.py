"""Walking a chain of pages with a caller-supplied fetch function.

The fetch function receives the identifier returned by
``PageableList.next_page`` and returns the next ``PageableList``. Nothing
here knows how pages are transported.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator
from typing import Any, Optional, TypeVar

from pageable.core.collection import PageableList
from pageable.core.paging import Page
from pageable.lifecycle.observability import atrack_fetch, track_fetch
from pageable.utils.exceptions import (
    InvalidArgument,
    PageableError,
    PageLimitExceeded,
    PagingLoopDetected,
)
from pageable.utils.settings import get_settings
from pageable.utils.types import AsyncFetchPage, FetchPage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _PageWalk:
    """Bookkeeping shared by the sync and async walkers."""

    def __init__(self, max_pages: Optional[int]) -> None:
        self.max_pages = max_pages if max_pages is not None else get_settings().max_pages
        if self.max_pages is not None and self.max_pages < 1:
            raise InvalidArgument("max_pages must be >= 1")
        self.page_number = 1
        self.seen: list[Page] = []

    def accept(self, page: Any) -> PageableList[Any]:
        if not isinstance(page, PageableList):
            raise PageableError(
                f"fetch_page must return a PageableList, got {type(page).__name__}"
            )
        return page

    def next_identifier(self, page: PageableList[Any]) -> Optional[Page]:
        """Return the identifier to fetch next, or None when the walk is over."""
        identifier = page.next_page
        if identifier is None:
            return None
        if identifier in self.seen:
            raise PagingLoopDetected(
                f"Next page {identifier!r} was already fetched; refusing to loop"
            )
        if self.max_pages is not None and self.page_number >= self.max_pages:
            raise PageLimitExceeded(
                f"Page walk stopped after {self.page_number} pages (max_pages={self.max_pages})"
            )
        self.seen.append(identifier)
        self.page_number += 1
        return identifier


def iter_pages(
    first: PageableList[T],
    fetch_page: FetchPage,
    *,
    max_pages: Optional[int] = None,
) -> Iterator[PageableList[T]]:
    """Yield first and every following page in order.

    Args:
        first: Page to start from; it is yielded without being fetched
        fetch_page: Called with each next-page identifier, returns the page
        max_pages: Maximum number of pages including first. Falls back to
            the ``max_pages`` setting when None.

    Raises:
        PageLimitExceeded: If more than max_pages pages would be walked
        PagingLoopDetected: If a next-page identifier repeats
        PageableError: If fetch_page returns something other than a PageableList
    """
    walk = _PageWalk(max_pages)
    page = walk.accept(first)
    logger.debug("Walking pages starting from %r", page.paging)
    while True:
        yield page
        identifier = walk.next_identifier(page)
        if identifier is None:
            break
        with track_fetch(walk.page_number, identifier) as ctx:
            page = walk.accept(fetch_page(identifier))
            ctx["item_count"] = len(page)
            ctx["has_next"] = page.has_next_page()
    logger.debug("Page walk finished after %d pages", walk.page_number)


def collect_pages(
    first: PageableList[T],
    fetch_page: FetchPage,
    *,
    max_pages: Optional[int] = None,
) -> list[T]:
    """Return the items of first and every following page, in page order."""
    items: list[T] = []
    for page in iter_pages(first, fetch_page, max_pages=max_pages):
        items.extend(page.current_page_items)
    return items


async def aiter_pages(
    first: PageableList[T],
    fetch_page: AsyncFetchPage,
    *,
    max_pages: Optional[int] = None,
) -> AsyncIterator[PageableList[T]]:
    """Async variant of iter_pages; fetch_page must be a coroutine function."""
    walk = _PageWalk(max_pages)
    page = walk.accept(first)
    logger.debug("Walking pages starting from %r", page.paging)
    while True:
        yield page
        identifier = walk.next_identifier(page)
        if identifier is None:
            break
        async with atrack_fetch(walk.page_number, identifier) as ctx:
            page = walk.accept(await fetch_page(identifier))
            ctx["item_count"] = len(page)
            ctx["has_next"] = page.has_next_page()
    logger.debug("Page walk finished after %d pages", walk.page_number)


async def acollect_pages(
    first: PageableList[T],
    fetch_page: AsyncFetchPage,
    *,
    max_pages: Optional[int] = None,
) -> list[T]:
    """Async variant of collect_pages."""
    items: list[T] = []
    async for page in aiter_pages(first, fetch_page, max_pages=max_pages):
        items.extend(page.current_page_items)
    return items
