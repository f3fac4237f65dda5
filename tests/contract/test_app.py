"""Contract tests for app-wide routes and the not-found trap."""

import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.core.config import load_allowed_origins
from storefront.core.errors import STACK_PLACEHOLDER
from storefront.main import create_app


def test_health_reports_environment(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["environment"] == "development"


def test_keep_alive_route_answers(client: TestClient) -> None:
    body = client.get("/api/keep-alive").json()

    assert body["message"] == "Server is awake!"
    assert body["uptime"] >= 0


def test_unmatched_route_is_trapped(client: TestClient) -> None:
    response = client.get("/not-a-real-route")

    assert response.status_code == 404
    assert response.json()["message"] == "Not Found - /not-a-real-route"
    assert response.json()["data"] is None


def test_production_hides_stack(image_storage) -> None:
    app = create_app(settings=Settings(environment="production"), image_storage=image_storage)

    with TestClient(app) as client:
        response = client.post("/api/orders")

    assert response.status_code == 404
    assert response.json() == {
        "message": "Not Found - /api/orders",
        "stack": STACK_PLACEHOLDER,
        "data": None,
    }


def test_preflight_allows_configured_origin(client: TestClient) -> None:
    response = client.options(
        "/api/products",
        headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"
    assert response.headers["access-control-allow-credentials"] == "true"


def test_preflight_refuses_unknown_origin(client: TestClient) -> None:
    response = client.options(
        "/api/products",
        headers={"Origin": "https://evil.example.com", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 400
    assert "access-control-allow-origin" not in response.headers


def test_frontend_url_is_added_to_allowed_origins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STOREFRONT_ALLOWED_ORIGINS", "https://admin.example.com/, https://shop.example.com")
    monkeypatch.setenv("FRONTEND_URL", "https://www.example.com/")

    assert load_allowed_origins() == (
        "https://admin.example.com",
        "https://shop.example.com",
        "https://www.example.com",
    )
