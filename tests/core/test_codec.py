import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from pageable import (
    InvalidArgument,
    PageableList,
    Paging,
    UriPage,
    configure,
    dump_pageable,
    parse_pageable,
)


class Project(BaseModel):
    id: int
    title: str


@dataclass
class Tag:
    name: str


PAYLOAD = {
    "items": [{"id": 1, "title": "alpha"}, {"id": 2, "title": "beta"}],
    "paging": {"offset": 0, "count": 2, "next": "/gdc/projects?offset=2"},
    "links": {"self": "/gdc/projects?offset=0"},
}


class TestParsePageable:
    def test_full_payload(self):
        page = parse_pageable(PAYLOAD)
        assert len(page) == 2
        assert page[0] == {"id": 1, "title": "alpha"}
        assert page.paging == Paging(offset=0, count=2, next_uri="/gdc/projects?offset=2")
        assert page.next_page == UriPage(uri="/gdc/projects?offset=2")
        assert page.links == {"self": "/gdc/projects?offset=0"}

    def test_typed_items(self):
        page = parse_pageable(PAYLOAD, Project)
        assert page.to_list() == [Project(id=1, title="alpha"), Project(id=2, title="beta")]

    def test_dataclass_items(self):
        page = parse_pageable({"items": [{"name": "x"}]}, Tag)
        assert page[0] == Tag(name="x")

    def test_json_text(self):
        page = parse_pageable(json.dumps(PAYLOAD))
        assert page == parse_pageable(PAYLOAD)
        assert parse_pageable(json.dumps(PAYLOAD).encode()).has_next_page() is True

    def test_items_only(self):
        page = parse_pageable({"items": [1, 2, 3]})
        assert page.paging is None
        assert page.links is None
        assert page.has_next_page() is False

    def test_null_paging_and_links(self):
        page = parse_pageable({"items": [], "paging": None, "links": None})
        assert page == PageableList()

    def test_last_page(self):
        page = parse_pageable({"items": [1], "paging": {"offset": 2, "count": 1}})
        assert page.has_next_page() is False

    def test_missing_items(self):
        with pytest.raises(InvalidArgument, match="no 'items' node"):
            parse_pageable({"paging": {"offset": 0}})

    def test_items_not_a_list(self):
        with pytest.raises(InvalidArgument, match="must be an array"):
            parse_pageable({"items": {"id": 1}})

    def test_not_an_object(self):
        with pytest.raises(InvalidArgument, match="must be an object"):
            parse_pageable([1, 2])

    def test_invalid_json(self):
        with pytest.raises(InvalidArgument, match="not valid JSON"):
            parse_pageable("{items: ")

    def test_bytes_not_utf8(self):
        with pytest.raises(InvalidArgument, match="not valid JSON"):
            parse_pageable(b'{"items": ["\xff"]}')

    def test_invalid_item(self):
        with pytest.raises(InvalidArgument, match="Invalid paged response"):
            parse_pageable({"items": [{"id": "x"}]}, Project)

    def test_invalid_paging(self):
        with pytest.raises(InvalidArgument):
            parse_pageable({"items": [], "paging": {"offset": -5}})

    def test_invalid_links(self):
        with pytest.raises(InvalidArgument):
            parse_pageable({"items": [], "links": {"self": 1}})

    def test_custom_node_names(self):
        configure(items_node="entries", paging_node="page", links_node="refs")
        page = parse_pageable({
            "entries": [1],
            "page": {"next": "/n"},
            "refs": {"self": "/s"},
        })
        assert page.to_list() == [1]
        assert page.has_next_page() is True
        assert page.links == {"self": "/s"}


class TestDumpPageable:
    def test_full_shape(self):
        page = parse_pageable(PAYLOAD, Project)
        assert dump_pageable(page) == PAYLOAD

    def test_absent_metadata_is_omitted(self):
        assert dump_pageable(PageableList([1, 2], None)) == {"items": [1, 2]}

    def test_custom_paging_not_serializable(self):
        class OffsetPaging:
            next = None

        with pytest.raises(InvalidArgument, match="Cannot serialize paging"):
            dump_pageable(PageableList([], OffsetPaging()))

    def test_round_trip_through_json(self):
        page = parse_pageable(PAYLOAD, Project)
        text = json.dumps(dump_pageable(page))
        assert parse_pageable(text, Project) == page
