"""Unit tests for the validation gate dependency."""

from __future__ import annotations

from typing import Any
import uuid

from fastapi import Depends
from fastapi import FastAPI
from fastapi import Request
from fastapi.testclient import TestClient

from storefront.core.errors import ErrorResponder
from storefront.core.errors import register_error_handlers
from storefront.validation.gate import read_body
from storefront.validation.gate import validate_request
from storefront.validation.rules import ID_RULES
from storefront.validation.rules import PAGINATION_RULES
from storefront.validation.rules import SLIDER_RULES


def _build_client() -> tuple[TestClient, list[Any]]:
    app = FastAPI()
    register_error_handlers(app, ErrorResponder(production=False))
    reached: list[Any] = []

    @app.post("/slides", dependencies=[Depends(validate_request(SLIDER_RULES))])
    async def create_slide(request: Request) -> dict[str, Any]:
        body = await read_body(request)
        reached.append(body)
        return {"received": body}

    @app.get("/items/{id}", dependencies=[Depends(validate_request(ID_RULES, PAGINATION_RULES))])
    def list_item_children(id: str) -> dict[str, str]:
        reached.append(id)
        return {"id": id}

    return TestClient(app), reached


def test_gate_rejects_with_itemized_errors_and_skips_handler() -> None:
    client, reached = _build_client()

    response = client.post("/slides", json={"subtitle": "s" * 201})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "errors": [
            {"field": "title", "message": "Title is required"},
            {"field": "subtitle", "message": "Subtitle cannot exceed 200 characters"},
        ],
    }
    assert reached == []


def test_gate_passes_request_through_unmodified() -> None:
    client, reached = _build_client()
    body = {"title": "  Spring  ", "order": 3, "extra": {"nested": True}}

    response = client.post("/slides", json=body)

    assert response.status_code == 200
    assert response.json() == {"received": body}
    assert reached == [body]


def test_gate_reads_multipart_form_fields() -> None:
    client, _ = _build_client()

    response = client.post(
        "/slides",
        data={"title": "Sale", "order": "not-a-number"},
        files={"image": ("slide.png", b"\x89PNG", "image/png")},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "order", "message": "Order must be an integer"}]


def test_gate_rejects_malformed_json() -> None:
    client, reached = _build_client()

    response = client.post("/slides", content=b"{title:", headers={"content-type": "application/json"})

    assert response.status_code == 400
    assert response.json() == {
        "success": False,
        "errors": [{"field": "body", "message": "Malformed JSON body"}],
    }
    assert reached == []


def test_gate_combines_path_and_query_rule_sets() -> None:
    client, reached = _build_client()

    response = client.get("/items/abc", params={"limit": "500"})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "id", "message": "Invalid ID format"},
        {"field": "limit", "message": "Limit must be between 1 and 100"},
    ]
    assert reached == []

    item_id = str(uuid.uuid4())
    ok = client.get(f"/items/{item_id}", params={"page": "2"})
    assert ok.status_code == 200
    assert reached == [item_id]
