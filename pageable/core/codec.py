"""Conversion between paged response payloads and PageableList.

A paged response is a JSON object with an ``items`` array and optional
``paging`` and ``links`` objects (node names are configurable)::

    {
        "items": [...],
        "paging": {"offset": 0, "count": 2, "next": "/things?offset=2"},
        "links": {"self": "/things?offset=0"}
    }
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, TypeAdapter, ValidationError

from pageable.core.collection import PageableList
from pageable.core.paging import Paging
from pageable.utils.exceptions import InvalidArgument
from pageable.utils.settings import get_settings

_links_adapter: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])
_items_adapter: TypeAdapter[list[Any]] = TypeAdapter(list[Any])


def parse_pageable(
    payload: Mapping[str, Any] | str | bytes,
    item_type: Optional[Any] = None,
) -> PageableList[Any]:
    """Build a PageableList from one page of a paged response.

    Args:
        payload: Decoded response object, or its JSON text
        item_type: Optional type every item is validated against
            (a pydantic model, a dataclass, ``int`` and so on)

    Returns:
        PageableList holding the page's items, paging and links

    Raises:
        InvalidArgument: If the payload is not a paged response or an
            item, the paging or the links fail validation
    """
    settings = get_settings()

    if isinstance(payload, (str, bytes, bytearray)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidArgument(f"Paged response is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise InvalidArgument(
            f"Paged response must be an object, got {type(payload).__name__}"
        )

    raw_items = payload.get(settings.items_node)
    if raw_items is None:
        raise InvalidArgument(f"Paged response has no '{settings.items_node}' node")
    if not isinstance(raw_items, list):
        raise InvalidArgument(f"'{settings.items_node}' node must be an array")

    try:
        if item_type is not None:
            items = TypeAdapter(list[item_type]).validate_python(raw_items)
        else:
            items = list(raw_items)

        raw_paging = payload.get(settings.paging_node)
        paging = Paging.model_validate(raw_paging) if raw_paging is not None else None

        raw_links = payload.get(settings.links_node)
        links = _links_adapter.validate_python(raw_links) if raw_links is not None else None
    except ValidationError as e:
        raise InvalidArgument(f"Invalid paged response: {e}") from e

    return PageableList(items, paging, links)


def dump_pageable(pageable: PageableList[Any]) -> dict[str, Any]:
    """Convert a PageableList into the paged response shape.

    Absent paging and links are omitted from the result.
    """
    settings = get_settings()
    data: dict[str, Any] = {
        settings.items_node: _items_adapter.dump_python(pageable.current_page_items, mode="json"),
    }

    paging = pageable.paging
    if paging is not None:
        if not isinstance(paging, BaseModel):
            raise InvalidArgument(
                f"Cannot serialize paging of type {type(paging).__name__}"
            )
        data[settings.paging_node] = paging.model_dump(by_alias=True, exclude_none=True, mode="json")

    if pageable.links is not None:
        data[settings.links_node] = dict(pageable.links)

    return data
