from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, Optional, TypeVar
from urllib.parse import urlencode

from pydantic import BaseModel

from pageable.core.collection import PageableList
from pageable.core.paging import PageRequest, Paging
from pageable.utils.exceptions import InvalidArgument, PageableError
from pageable.utils.settings import get_settings

T = TypeVar("T")


def register_exception_handlers(app: Any) -> None:
    """Register pageable exception handlers on a FastAPI app."""
    from starlette.responses import JSONResponse

    @app.exception_handler(InvalidArgument)
    async def invalid_argument_handler(request: Any, exc: InvalidArgument):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PageableError)
    async def pageable_error_handler(request: Any, exc: PageableError):
        return JSONResponse(status_code=500, content={"detail": str(exc)})


class PageParams:
    """FastAPI dependency for offset/limit query parameters."""

    def __init__(self, offset: int = 0, limit: Optional[int] = None):
        settings = get_settings()
        self.offset = max(0, offset)
        self.limit = settings.default_limit if limit is None else min(max(1, limit), settings.max_limit)

    def to_request(self) -> PageRequest:
        return PageRequest(offset=self.offset, limit=self.limit)


def _page_uri(base_uri: str, request: PageRequest) -> str:
    separator = "&" if "?" in base_uri else "?"
    return f"{base_uri}{separator}{urlencode(request.update_params({}))}"


def paginate(items: Sequence[T], request: PageRequest, base_uri: str) -> PageableList[T]:
    """Cut one page out of a full sequence.

    Args:
        items: The complete result set
        request: Window to return
        base_uri: URI of the collection resource, used for the self and next links

    Returns:
        PageableList whose paging points at the following window, if any
    """
    window = list(items[request.offset:request.offset + request.limit])
    links = {"self": _page_uri(base_uri, request)}

    next_uri = None
    if request.offset + request.limit < len(items):
        next_uri = _page_uri(base_uri, request.next_request())
        links["next"] = next_uri

    paging = Paging(offset=request.offset, count=len(window), next_uri=next_uri)
    return PageableList(window, paging, links)


class PageableResponse(BaseModel, Generic[T]):
    """Paged response model for API endpoints."""

    items: list[T]
    paging: Optional[Paging] = None
    links: Optional[dict[str, str]] = None

    @classmethod
    def from_pageable(cls, pageable: PageableList[T]) -> PageableResponse[T]:
        return cls(
            items=pageable.current_page_items,
            paging=pageable.paging,
            links=dict(pageable.links) if pageable.links is not None else None,
        )

    def to_pageable(self) -> PageableList[T]:
        return PageableList(list(self.items), self.paging, self.links)
