import pytest

from pageable import Paging, PageableList, disable_tracing, reset_settings


@pytest.fixture(autouse=True)
def reset_state():
    """Restore default settings and observability state after each test."""
    yield
    disable_tracing()
    reset_settings()


def make_chain(*pages: list) -> tuple[PageableList, dict]:
    """Build a chain of pages linked by next URIs.

    Returns the first page and a mapping from next-page URI to page.
    """
    by_uri = {}
    built = []
    for number, items in enumerate(pages):
        next_uri = f"/things?page={number + 1}" if number + 1 < len(pages) else None
        paging = Paging(offset=number * 10, count=len(items), next_uri=next_uri)
        built.append(PageableList(list(items), paging))
    for number, page in enumerate(built[1:], start=1):
        by_uri[f"/things?page={number}"] = page
    return built[0], by_uri


@pytest.fixture
def three_pages():
    return make_chain(["a", "b"], ["c", "d"], ["e"])


@pytest.fixture
def page_chain():
    return make_chain
