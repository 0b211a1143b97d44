"""Paging descriptors and next-page identifiers."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable
from urllib.parse import parse_qsl, urljoin, urlsplit

from pydantic import BaseModel, Field

from pageable.utils.settings import get_settings
from pageable.utils.types import Params, merge_params


@runtime_checkable
class Page(Protocol):
    """Identifier of a page that can be requested from the server."""

    def update_params(self, params: Params) -> Params:
        ...


@runtime_checkable
class PagingDescriptor(Protocol):
    """Metadata of the current page, optionally pointing at the next one."""

    @property
    def next(self) -> Optional[Page]:
        ...


class UriPage(BaseModel):
    """Next page addressed by the URI the server handed out."""

    model_config = {"frozen": True}

    uri: str = Field(min_length=1)

    def update_params(self, params: Params) -> Params:
        """Merge the query parameters carried by the URI into params."""
        query = dict(parse_qsl(urlsplit(self.uri).query, keep_blank_values=True))
        return merge_params(params, query)

    def page_uri(self, base: str | None = None) -> str:
        """Resolve the page URI, relative to base when given."""
        if base is None:
            return self.uri
        return urljoin(base, self.uri)


class PageRequest(BaseModel):
    """Offset/limit window of a paged resource."""

    model_config = {"frozen": True}

    offset: int = Field(default=0, ge=0)
    limit: int = Field(default_factory=lambda: get_settings().default_limit, ge=1)

    def update_params(self, params: Params) -> Params:
        return merge_params(params, offset=self.offset, limit=self.limit)

    def next_request(self) -> PageRequest:
        """Return the window directly after this one."""
        return PageRequest(offset=self.offset + self.limit, limit=self.limit)


class Paging(BaseModel):
    """Paging node of a paged response.

    ``next_uri`` is read from and written to the ``next`` key.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    offset: Optional[int] = Field(default=None, ge=0)
    count: Optional[int] = Field(default=None, ge=0)
    next_uri: Optional[str] = Field(default=None, alias="next")

    @property
    def next(self) -> Optional[UriPage]:
        if not self.next_uri:
            return None
        return UriPage(uri=self.next_uri)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
