from typing import Any, Callable, Awaitable, Mapping, TypeVar

# Top-level nodes of a paged response
ITEMS_NODE = "items"
PAGING_NODE = "paging"
LINKS_NODE = "links"

# Java-style hash mixing constant
HASH_MULTIPLIER = 31

Links = Mapping[str, str]
Params = dict[str, Any]
Payload = Mapping[str, Any]

# Generic type variable for page items
T = TypeVar("T")

FetchPage = Callable[[Any], Any]
AsyncFetchPage = Callable[[Any], Awaitable[Any]]


def merge_params(
    base: Params | None = None,
    override: Params | None = None,
    **kwargs: Any
) -> Params:
    """Merge request parameter dictionaries with proper precedence.

    Args:
        base: Base params dict
        override: Override params dict (takes precedence over base)
        **kwargs: Additional params (highest precedence)

    Returns:
        Merged params dictionary
    """
    return {**(base or {}), **(override or {}), **kwargs}
