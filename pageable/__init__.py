from pageable.core import (
    PageableList,
    SubList,
    ListCursor,
    Page,
    PagingDescriptor,
    Paging,
    PageRequest,
    UriPage,
    iter_pages,
    collect_pages,
    aiter_pages,
    acollect_pages,
    parse_pageable,
    dump_pageable,
)
from pageable.lifecycle import (
    enable_tracing,
    disable_tracing,
    FetchEvent,
    add_listener,
)
from pageable.utils import (
    PageableError,
    InvalidArgument,
    ConcurrentModification,
    PageLimitExceeded,
    PagingLoopDetected,
    PageableSettings,
    get_settings,
    configure,
    reset_settings,
)

__all__ = [
    # Core
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
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "FetchEvent",
    "add_listener",
    # Utils
    "PageableError",
    "InvalidArgument",
    "ConcurrentModification",
    "PageLimitExceeded",
    "PagingLoopDetected",
    "PageableSettings",
    "get_settings",
    "configure",
    "reset_settings",
]
