"""Contract tests for slider routes."""

from uuid import uuid4

from fastapi.testclient import TestClient

from storefront.media.storage import ImageServiceError


def _upload_slide(client: TestClient, **fields: str) -> dict:
    data = {"title": "Summer Sale", **fields}
    response = client.post(
        "/api/slider",
        data=data,
        files={"image": ("hero.webp", b"webp-bytes", "image/webp")},
    )
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_create_slide_uploads_image(client: TestClient, image_storage) -> None:
    slide = _upload_slide(client, subtitle="Up to 50% off", buttonLink="https://shop.example.com/sale", order="2")

    assert slide["publicId"] == "slider/img-1"
    assert slide["imageUrl"] == "https://res.example.com/slider/img-1.webp"
    assert slide["altText"] == "Summer Sale"
    assert slide["order"] == 2
    assert image_storage.uploads == [("slider", 10)]


def test_create_slide_requires_image(client: TestClient) -> None:
    response = client.post("/api/slider", data={"title": "No picture"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "No image file provided"}


def test_create_slide_rejects_invalid_fields(client: TestClient, image_storage) -> None:
    response = client.post(
        "/api/slider",
        data={"title": "", "buttonLink": "not a url", "order": "first"},
        files={"image": ("hero.webp", b"webp-bytes", "image/webp")},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "title", "message": "Title is required"},
        {"field": "buttonLink", "message": "Button link must be a valid URL"},
        {"field": "order", "message": "Order must be an integer"},
    ]
    assert image_storage.uploads == []


def test_list_hides_inactive_slides_unless_admin(client: TestClient) -> None:
    _upload_slide(client, title="Second", order="2")
    _upload_slide(client, title="First", order="1")
    _upload_slide(client, title="Draft", isActive="false")

    public = client.get("/api/slider").json()
    admin = client.get("/api/slider", params={"admin": "true"}).json()

    assert [slide["title"] for slide in public["data"]] == ["First", "Second"]
    assert admin["count"] == 3


def test_update_slide_fields(client: TestClient) -> None:
    slide = _upload_slide(client)

    response = client.put(f"/api/slider/{slide['id']}", json={"title": "Winter Sale", "isActive": False})

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Winter Sale"
    assert response.json()["data"]["isActive"] is False


def test_delete_slide_removes_hosted_image(client: TestClient, image_storage) -> None:
    slide = _upload_slide(client)

    response = client.delete(f"/api/slider/{slide['id']}")

    assert response.status_code == 200
    assert image_storage.assets == {}
    assert client.delete(f"/api/slider/{slide['id']}").status_code == 404


def test_delete_keeps_slide_when_image_service_fails(client: TestClient, image_storage) -> None:
    slide = _upload_slide(client)
    image_storage.fail_with = ImageServiceError("Service unavailable")

    response = client.delete(f"/api/slider/{slide['id']}")

    assert response.status_code == 502
    assert response.json()["message"] == "Service unavailable"
    assert client.get("/api/slider").json()["count"] == 1


def test_unknown_slide_reports_not_found(client: TestClient) -> None:
    response = client.put(f"/api/slider/{uuid4()}", json={"title": "Ghost"})

    assert response.status_code == 404
    assert response.json()["message"] == "Slider image not found"
