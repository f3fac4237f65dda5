"""Contract tests for product routes."""

from typing import Any
from uuid import uuid4

from fastapi.testclient import TestClient

from storefront.core.errors import STACK_PLACEHOLDER
from storefront.media.storage import ImageServiceError
from storefront.media.uploads import INVALID_TYPE_MESSAGE


def _create_category(client: TestClient, name: str = "Shirts") -> dict[str, Any]:
    response = client.post("/api/categories", json={"name": name, "description": "Tops"})
    assert response.status_code == 201
    return response.json()["data"]


def _product_payload(category_id: str, **overrides: Any) -> dict[str, Any]:
    payload = {
        "name": "Linen Shirt",
        "description": "Breathable summer shirt",
        "price": 49.9,
        "stock": 12,
        "sku": "LIN-001",
        "category": category_id,
        "tags": ["summer", "linen"],
        "isFeatured": True,
    }
    payload.update(overrides)
    return payload


def _create_product(client: TestClient, category_id: str, **overrides: Any) -> dict[str, Any]:
    response = client.post("/api/products", json=_product_payload(category_id, **overrides))
    assert response.status_code == 201, response.json()
    return response.json()["data"]


def test_create_product_passes_gate_and_persists(client: TestClient) -> None:
    category = _create_category(client)

    response = client.post("/api/products", json=_product_payload(category["id"]))

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"
    product = body["data"]
    assert product["slug"] == "linen-shirt"
    assert product["price"] == 49.9
    assert product["isFeatured"] is True
    assert product["category"]["name"] == "Shirts"


def test_create_product_rejects_invalid_fields(client: TestClient) -> None:
    response = client.post(
        "/api/products",
        json={
            "name": "",
            "description": "Shirt",
            "price": -5,
            "stock": 1.5,
            "sku": "X",
            "category": "not-an-id",
        },
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert {"field": "name", "message": "Product name is required"} in body["errors"]
    assert {"field": "price", "message": "Price must be a positive number"} in body["errors"]
    assert {"field": "stock", "message": "Stock must be a non-negative integer"} in body["errors"]
    assert {"field": "category", "message": "Invalid category ID"} in body["errors"]


def test_create_product_requires_existing_category(client: TestClient) -> None:
    response = client.post("/api/products", json=_product_payload(str(uuid4())))

    assert response.status_code == 400
    assert response.json()["message"] == "Category not found"


def test_duplicate_product_name_is_refused(client: TestClient) -> None:
    category = _create_category(client)
    _create_product(client, category["id"])

    response = client.post("/api/products", json=_product_payload(category["id"], sku="LIN-002"))

    assert response.status_code == 400
    assert response.json()["message"] == "Product with this name already exists"


def test_list_products_filters_and_paginates(client: TestClient) -> None:
    category = _create_category(client)
    _create_product(client, category["id"])
    _create_product(client, category["id"], name="Wool Sweater", sku="WOL-001", price=89.0, isFeatured=False)
    _create_product(client, category["id"], name="Cotton Tee", sku="COT-001", price=19.0, isFeatured=False)

    response = client.get("/api/products", params={"limit": 2, "sortBy": "price", "sortOrder": "asc"})

    assert response.status_code == 200
    page = response.json()["data"]
    assert page["total"] == 3
    assert page["totalPages"] == 2
    assert [product["name"] for product in page["products"]] == ["Cotton Tee", "Linen Shirt"]

    featured = client.get("/api/products", params={"isFeatured": "true"}).json()["data"]
    assert [product["name"] for product in featured["products"]] == ["Linen Shirt"]

    searched = client.get("/api/products", params={"search": "wool"}).json()["data"]
    assert [product["sku"] for product in searched["products"]] == ["WOL-001"]


def test_list_products_rejects_bad_pagination(client: TestClient) -> None:
    response = client.get("/api/products", params={"page": 0, "limit": 500})

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "page", "message": "Page must be a positive integer"},
        {"field": "limit", "message": "Limit must be between 1 and 100"},
    ]


def test_get_product_by_id_and_slug(client: TestClient) -> None:
    category = _create_category(client)
    product = _create_product(client, category["id"])

    by_id = client.get(f"/api/products/{product['id']}")
    by_slug = client.get("/api/products/slug/linen-shirt")

    assert by_id.status_code == 200
    assert by_slug.json()["data"]["id"] == product["id"]


def test_malformed_id_is_rejected_by_gate(client: TestClient) -> None:
    response = client.get("/api/products/12345")

    assert response.status_code == 400
    assert response.json()["errors"] == [{"field": "id", "message": "Invalid ID format"}]


def test_unknown_product_reports_not_found(client: TestClient) -> None:
    response = client.get(f"/api/products/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_update_product_changes_slug_with_name(client: TestClient) -> None:
    category = _create_category(client)
    product = _create_product(client, category["id"])

    response = client.put(f"/api/products/{product['id']}", json={"name": "Linen Shirt Blue", "stock": 3})

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["slug"] == "linen-shirt-blue"
    assert updated["stock"] == 3
    assert updated["price"] == 49.9


def test_delete_product_removes_hosted_images(client: TestClient, image_storage) -> None:
    category = _create_category(client)
    uploaded = client.post(
        "/api/products/upload-images",
        files=[
            ("images", ("front.png", b"front", "image/png")),
            ("images", ("back.jpg", b"back", "image/jpeg")),
        ],
    ).json()["data"]
    product = _create_product(client, category["id"], images=uploaded)
    assert len(image_storage.assets) == 2

    response = client.delete(f"/api/products/{product['id']}")

    assert response.status_code == 200
    assert response.json()["data"] == {"id": product["id"], "name": "Linen Shirt"}
    assert image_storage.assets == {}
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_delete_product_propagates_missing_image(client: TestClient, image_storage) -> None:
    category = _create_category(client)
    product = _create_product(
        client,
        category["id"],
        images=[{"url": "https://res.example.com/gone.webp", "publicId": "products/gone"}],
    )

    response = client.delete(f"/api/products/{product['id']}")

    assert response.status_code == 404
    body = response.json()
    assert body["message"] == "Images not found: products/gone"
    assert body["data"] == {"publicIds": ["products/gone"]}
    assert client.get(f"/api/products/{product['id']}").status_code == 200


def test_upload_images_returns_descriptors(client: TestClient, image_storage) -> None:
    response = client.post(
        "/api/products/upload-images",
        files=[
            ("images", ("front.png", b"front", "image/png")),
            ("images", ("back.webp", b"back", "image/webp")),
        ],
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    first, second = body["data"]
    assert first["publicId"] == "products/img-1"
    assert first["url"] == "https://res.example.com/products/img-1.webp"
    assert first["isPrimary"] is True
    assert second["isPrimary"] is False
    assert second["order"] == 1
    assert image_storage.uploads == [("products", 5), ("products", 4)]


def test_upload_images_rejects_non_images(client: TestClient, image_storage) -> None:
    response = client.post(
        "/api/products/upload-images",
        files=[("images", ("notes.txt", b"hello", "text/plain"))],
    )

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": INVALID_TYPE_MESSAGE}
    assert image_storage.uploads == []


def test_upload_images_requires_files(client: TestClient) -> None:
    response = client.post("/api/products/upload-images", data={"note": "nothing"})

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "No files uploaded"}


def test_image_service_failure_reaches_responder(client: TestClient, image_storage) -> None:
    image_storage.fail_with = ImageServiceError("Invalid credentials")

    response = client.post(
        "/api/products/upload-images",
        files=[("images", ("front.png", b"front", "image/png"))],
    )

    assert response.status_code == 502
    body = response.json()
    assert body["message"] == "Invalid credentials"
    assert body["stack"] != STACK_PLACEHOLDER


def test_numeric_strings_out_of_range_are_rejected(client: TestClient) -> None:
    category = _create_category(client)

    response = client.post(
        "/api/products",
        json=_product_payload(category["id"], price="1e400", stock="99999999999999999999999"),
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "price", "message": "Price must be a positive number"},
        {"field": "stock", "message": "Stock must be a non-negative integer"},
    ]
    assert client.get("/api/products").json()["data"]["total"] == 0


def test_update_rejects_stock_beyond_column_range(client: TestClient) -> None:
    category = _create_category(client)
    product = _create_product(client, category["id"])

    response = client.put(f"/api/products/{product['id']}", json={"stock": 2**40})

    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["errors"][0]["field"].startswith("stock")


def test_text_fields_are_stored_trimmed(client: TestClient) -> None:
    category = _create_category(client)
    padded_name = "  " + "A" * 200 + "  "

    product = _create_product(client, category["id"], name=padded_name, sku="  PAD-001  ")

    assert product["name"] == "A" * 200
    assert product["sku"] == "PAD-001"
    assert product["slug"] == "a" * 200
