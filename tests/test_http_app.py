"""End-to-end tests for envelope rendering through a FastAPI app."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi import Depends, FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import BaseModel

from jsendkit import Err, error_code, fail_code_status, promote, success, success_status
from jsendkit.envelope import Envelope
from jsendkit.http import (
    EnvelopeResponse,
    JsonBody,
    MatchedPath,
    Query,
    create_app,
    envelope_from_response,
    enveloped,
    to_response,
)


class Item(BaseModel):
    """Body model used by app tests."""

    id: int
    name: str


class Page(BaseModel):
    """Query model used by app tests."""

    page: int


def _session() -> Iterator[str]:
    """Yield dependency standing in for a per-request resource."""
    yield "session-1"


def _app() -> FastAPI:
    """Build an app exercising every envelope entry point."""
    app = create_app(title="jsendkit-test", version="9.9.9")

    @app.post("/items")
    @enveloped
    async def create_item(item: Item = Depends(JsonBody(Item))) -> Envelope:
        return success_status(item, 201)

    @app.get("/items")
    @enveloped
    def list_items(page: Page = Depends(Query(Page))) -> list[int]:
        return [page.page]

    @app.get("/items/{item_id}")
    @enveloped
    async def get_item(item_id: int, route: str = Depends(MatchedPath())) -> dict[str, object]:
        if item_id == 404:
            raise HTTPException(status_code=404, detail="item not found")
        if item_id == 503:
            raise HTTPException(
                status_code=503,
                detail="storage offline",
                headers={"Retry-After": "5"},
            )
        if item_id == 409:
            fail_code_status("already archived", 7, 409).or_raise()
        return {"id": item_id, "route": route}

    @app.get("/outcome")
    @enveloped
    def outcome() -> object:
        return (Err("upstream exploded"), "UPSTREAM", 502)

    @app.post("/sessions/items")
    @enveloped
    async def create_in_session(
        session: str = Depends(_session),
        item: Item = Depends(JsonBody(Item)),
    ) -> Envelope:
        return success({"session": session, "id": item.id})

    @app.get("/sessions/archived")
    async def archived(session: str = Depends(_session)) -> EnvelopeResponse:
        fail_code_status("archived", 3, 410).or_raise()
        return to_response(session)

    @app.get("/raw")
    def raw() -> EnvelopeResponse:
        return to_response(error_code("boom", 3))

    return app


@pytest.fixture
def client() -> TestClient:
    """Return a test client over a fresh app."""
    return TestClient(_app())


def test_create_app_sets_metadata() -> None:
    """create_app should return a FastAPI app with the given metadata."""
    app = create_app(title="svc", version="1.2.3")

    assert isinstance(app, FastAPI)
    assert (app.title, app.version) == ("svc", "1.2.3")


def test_success_renders_status_and_body(client: TestClient) -> None:
    """An enveloped handler should render its Success with the chosen status."""
    response = client.post("/items", json={"id": 1, "name": "a"})

    assert response.status_code == 201
    assert response.json() == {"type": "success", "data": {"id": 1, "name": "a"}}


def test_malformed_json_renders_fail_400(client: TestClient) -> None:
    """Extractor rejections should surface as Fail envelopes."""
    response = client.post(
        "/items",
        content=b'{"id": 1,',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["type"] == "fail"
    assert body["message"].startswith("Failed to parse the request body as JSON: ")
    assert "code" not in body


def test_wrong_content_type_renders_fail_415(client: TestClient) -> None:
    """Non-JSON bodies should be rejected with 415."""
    response = client.post("/items", content=b"id=1", headers={"content-type": "text/plain"})

    assert response.status_code == 415
    assert response.json()["type"] == "fail"


def test_query_extractor_and_sync_handler(client: TestClient) -> None:
    """Sync handlers should be promoted and query rejections rendered."""
    assert client.get("/items", params={"page": 3}).json() == {"type": "success", "data": [3]}

    rejected = client.get("/items", params={"page": "x"})
    assert rejected.status_code == 400
    assert rejected.json()["message"].startswith("Failed to deserialize query string")


def test_matched_path_is_route_template(client: TestClient) -> None:
    """MatchedPath should see the route template inside a real app."""
    response = client.get("/items/5")

    assert response.json()["data"] == {"id": 5, "route": "/items/{item_id}"}


def test_request_validation_error_renders_fail_422(client: TestClient) -> None:
    """FastAPI parameter validation failures should become 422 Fail envelopes."""
    response = client.get("/items/abc")

    assert response.status_code == 422
    body = response.json()
    assert body["type"] == "fail"
    assert body["message"].startswith("path.item_id: ")


def test_http_exception_below_500_renders_fail(client: TestClient) -> None:
    """HTTPException below 500 should become a Fail."""
    response = client.get("/items/404")

    assert response.status_code == 404
    assert response.json() == {"type": "fail", "message": "item not found"}


def test_http_exception_from_500_renders_error_with_headers(client: TestClient) -> None:
    """HTTPException at or above 500 should become an Error keeping headers."""
    response = client.get("/items/503")

    assert response.status_code == 503
    assert response.headers["retry-after"] == "5"
    assert response.json() == {"type": "error", "message": "storage offline"}


def test_unknown_route_renders_fail_404(client: TestClient) -> None:
    """Router-level 404s should share the envelope shape."""
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["type"] == "fail"


def test_or_raise_inside_handler_returns_carried_envelope(client: TestClient) -> None:
    """or_raise should act as an early return inside enveloped handlers."""
    response = client.get("/items/409")

    assert response.status_code == 409
    assert response.json() == {"type": "fail", "message": "already archived", "code": 7}


def test_outcome_tuple_is_promoted_to_error(client: TestClient) -> None:
    """Err outcomes returned by handlers should render as Error envelopes."""
    response = client.get("/outcome")

    assert response.status_code == 502
    assert response.json() == {
        "type": "error",
        "message": "upstream exploded",
        "code": "UPSTREAM",
    }


def test_to_response_passes_through_enveloped_responses(client: TestClient) -> None:
    """Plain handlers can return EnvelopeResponse directly."""
    response = client.get("/raw")

    assert response.status_code == 500
    assert response.json() == {"type": "error", "message": "boom", "code": 3}


def test_envelope_from_response_carries_status(client: TestClient) -> None:
    """Parsed responses should keep the HTTP status on the envelope."""
    created = envelope_from_response(client.post("/items", json={"id": 2, "name": "b"}), data_type=Item)
    conflict = envelope_from_response(client.get("/items/409"))
    upstream = envelope_from_response(client.get("/outcome"), code_type=str)

    assert created.status == 201
    assert created.unwrap() == Item(id=2, name="b")
    assert conflict == fail_code_status("already archived", 7, 409)
    assert conflict.status == 409
    assert upstream.is_error()
    assert upstream.status == 502
    assert upstream.code == "UPSTREAM"


def test_flattened_style_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """wire.style=flattened should merge object payloads onto the response."""
    monkeypatch.setenv("JSENDKIT_WIRE__STYLE", "flattened")
    client = TestClient(_app())

    response = client.get("/items/6")

    assert response.json() == {"type": "success", "id": 6, "route": "/items/{item_id}"}
    assert envelope_from_response(response) == promote({"id": 6, "route": "/items/{item_id}"})


def test_rejection_passes_through_yield_dependency(client: TestClient) -> None:
    """A rejection raised while a yield dependency is open should stay a 400 Fail."""
    rejected = client.post(
        "/sessions/items",
        content=b"{bad",
        headers={"content-type": "application/json"},
    )
    accepted = client.post("/sessions/items", json={"id": 3, "name": "c"})

    assert rejected.status_code == 400
    assert rejected.json()["type"] == "fail"
    assert accepted.json() == {"type": "success", "data": {"session": "session-1", "id": 3}}


def test_or_raise_passes_through_yield_dependency(client: TestClient) -> None:
    """An early return unwinding a yield dependency should render its envelope."""
    response = client.get("/sessions/archived")

    assert response.status_code == 410
    assert response.json() == {"type": "fail", "message": "archived", "code": 3}
