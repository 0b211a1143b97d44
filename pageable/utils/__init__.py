from pageable.utils.exceptions import (
    PageableError,
    InvalidArgument,
    ConcurrentModification,
    PageLimitExceeded,
    PagingLoopDetected,
)
from pageable.utils.settings import PageableSettings, get_settings, configure, reset_settings
from pageable.utils.types import (
    Links,
    Params,
    Payload,
    merge_params,
    ITEMS_NODE,
    PAGING_NODE,
    LINKS_NODE,
)

__all__ = [
    "PageableError",
    "InvalidArgument",
    "ConcurrentModification",
    "PageLimitExceeded",
    "PagingLoopDetected",
    "PageableSettings",
    "get_settings",
    "configure",
    "reset_settings",
    "Links",
    "Params",
    "Payload",
    "merge_params",
    "ITEMS_NODE",
    "PAGING_NODE",
    "LINKS_NODE",
]
