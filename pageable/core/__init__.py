from pageable.core.collection import PageableList
from pageable.core.views import SubList, ListCursor
from pageable.core.paging import Page, PagingDescriptor, Paging, PageRequest, UriPage
from pageable.core.aggregate import iter_pages, collect_pages, aiter_pages, acollect_pages
from pageable.core.codec import parse_pageable, dump_pageable

__all__ = [
    "PageableList",
    "SubList",
    "ListCursor",
    "Page",
    "PagingDescriptor",
    "Paging",
    "PageRequest",
    "UriPage",
    "iter_pages",
    "collect_pages",
    "aiter_pages",
    "acollect_pages",
    "parse_pageable",
    "dump_pageable",
]
