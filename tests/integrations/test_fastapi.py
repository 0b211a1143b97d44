from __future__ import annotations

from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from pageable import (
    InvalidArgument,
    PageableError,
    PageableList,
    PageRequest,
    Paging,
    collect_pages,
    configure,
    parse_pageable,
)
from pageable.integrations.fastapi import (
    PageableResponse,
    PageParams,
    paginate,
    register_exception_handlers,
)

NUMBERS = list(range(7))


def _build_app() -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/numbers", response_model=PageableResponse[int])
    async def list_numbers(params: PageParams = Depends()):
        return PageableResponse[int].from_pageable(
            paginate(NUMBERS, params.to_request(), "/numbers")
        )

    return app


def test_pagination_params_defaults():
    p = PageParams()
    assert p.offset == 0
    assert p.limit == 100


def test_pagination_params_clamps():
    p = PageParams(offset=-3, limit=99999)
    assert p.offset == 0
    assert p.limit == 1000
    assert PageParams(limit=0).limit == 1
    assert PageParams(limit=None).limit == 100


def test_pagination_params_follow_settings():
    configure(default_limit=5, max_limit=50)
    assert PageParams().limit == 5
    assert PageParams(limit=80).limit == 50
    assert PageParams(offset=4, limit=2).to_request() == PageRequest(offset=4, limit=2)


def test_paginate_middle_page():
    page = paginate(NUMBERS, PageRequest(offset=2, limit=2), "/numbers")
    assert page.to_list() == [2, 3]
    assert page.paging == Paging(offset=2, count=2, next_uri="/numbers?offset=4&limit=2")
    assert page.links == {
        "self": "/numbers?offset=2&limit=2",
        "next": "/numbers?offset=4&limit=2",
    }


def test_paginate_last_page():
    page = paginate(NUMBERS, PageRequest(offset=6, limit=2), "/numbers?sort=asc")
    assert page.to_list() == [6]
    assert page.has_next_page() is False
    assert page.links == {"self": "/numbers?sort=asc&offset=6&limit=2"}


def test_paginate_past_the_end():
    page = paginate(NUMBERS, PageRequest(offset=50, limit=2), "/numbers")
    assert len(page) == 0
    assert page.has_next_page() is False


def test_response_round_trip():
    page = paginate(NUMBERS, PageRequest(offset=0, limit=3), "/numbers")
    response = PageableResponse[int].from_pageable(page)
    assert response.items == [0, 1, 2]
    assert response.to_pageable() == page


def test_response_without_metadata():
    response = PageableResponse[str].from_pageable(PageableList(["a"], None))
    assert response.paging is None
    assert response.links is None


def test_endpoint_serves_paged_shape():
    client = TestClient(_build_app())
    resp = client.get("/numbers", params={"offset": 0, "limit": 3})
    assert resp.status_code == 200
    body = resp.json()
    assert body["items"] == [0, 1, 2]
    assert body["paging"]["next"] == "/numbers?offset=3&limit=3"
    assert body["links"]["self"] == "/numbers?offset=0&limit=3"


def test_client_walks_all_pages():
    client = TestClient(_build_app())
    calls = []

    def fetch_page(identifier):
        calls.append(identifier.page_uri())
        return parse_pageable(client.get(identifier.page_uri()).json(), int)

    first = parse_pageable(client.get("/numbers?offset=0&limit=3").json(), int)
    assert first.has_next_page() is True
    assert collect_pages(first, fetch_page) == NUMBERS
    assert calls == ["/numbers?offset=3&limit=3", "/numbers?offset=6&limit=3"]


def test_exception_handler_400():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/bad")
    async def bad_endpoint():
        raise InvalidArgument("items must not be None")

    client = TestClient(app)
    resp = client.get("/bad")
    assert resp.status_code == 400
    assert "must not be None" in resp.json()["detail"]


def test_exception_handler_500():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/error")
    async def error_endpoint():
        raise PageableError("Something went wrong")

    client = TestClient(app)
    resp = client.get("/error")
    assert resp.status_code == 500
    assert "Something went wrong" in resp.json()["detail"]
