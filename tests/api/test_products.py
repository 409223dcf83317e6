"""Tests for product and category endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient


class TestGetProduct:
    """Tests for GET /api/v1/product/{slug}."""

    def test_get_product(self, client: TestClient) -> None:
        """Product is returned with nested category."""
        response = client.get("/api/v1/product/story-one")

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "p1"
        assert data["slug"] == "story-one"
        assert data["name"] == "Story One"
        assert len(data["description"]) == 250
        assert Decimal(str(data["price"])) == Decimal("1234.50")
        assert data["category"] == {"id": "cat-a", "name": "Fantasy", "slug": "fantasy"}
        assert "photo_data" not in data

    def test_product_not_found(self, client: TestClient) -> None:
        """Unknown slug returns 404 with error body."""
        response = client.get("/api/v1/product/no-such-story")

        assert response.status_code == 404
        data = response.json()
        assert data["error_code"] == "PRODUCT_NOT_FOUND"
        assert "no-such-story" in data["message"]
        assert data["request_id"] == response.headers["X-Request-ID"]


class TestRelatedProducts:
    """Tests for GET /api/v1/related-product/{product_id}/{category_id}."""

    def test_related_products(self, client: TestClient) -> None:
        """Same-category products are returned without the reference."""
        response = client.get("/api/v1/related-product/p1/cat-a")

        assert response.status_code == 200
        assert [p["id"] for p in response.json()["items"]] == ["p2", "p3"]

    def test_limit(self, client: TestClient) -> None:
        """Limit caps the result."""
        response = client.get("/api/v1/related-product/p1/cat-a", params={"limit": 1})
        assert [p["id"] for p in response.json()["items"]] == ["p2"]

    def test_zero_limit(self, client: TestClient) -> None:
        """Zero limit returns an empty list."""
        response = client.get("/api/v1/related-product/p1/cat-a", params={"limit": 0})
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_negative_limit_rejected(self, client: TestClient) -> None:
        """Negative limit fails validation."""
        response = client.get("/api/v1/related-product/p1/cat-a", params={"limit": -1})
        assert response.status_code == 422

    def test_alone_in_category(self, client: TestClient) -> None:
        """A product alone in its category has no related products."""
        response = client.get("/api/v1/related-product/p4/cat-b")
        assert response.json()["items"] == []


class TestProductPhoto:
    """Tests for GET /api/v1/product-photo/{product_id}."""

    def test_photo(self, client: TestClient) -> None:
        """Raw bytes are served with the stored content type."""
        response = client.get("/api/v1/product-photo/p1")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    def test_no_photo(self, client: TestClient) -> None:
        """Product without a photo returns 404."""
        response = client.get("/api/v1/product-photo/p2")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PHOTO_NOT_FOUND"


class TestBrowse:
    """Tests for listing endpoints."""

    def test_list_products(self, client: TestClient) -> None:
        """Products are paginated newest first."""
        response = client.get("/api/v1/products", params={"page": 1, "page_size": 2})

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data["items"]] == ["p4", "p3"]
        assert data["total"] == 4
        assert data["page"] == 1
        assert data["page_size"] == 2
        assert data["has_more"] is True

    def test_invalid_page(self, client: TestClient) -> None:
        """Page numbers start at 1."""
        response = client.get("/api/v1/products", params={"page": 0})
        assert response.status_code == 422

    def test_product_count(self, client: TestClient) -> None:
        """Count covers every product."""
        response = client.get("/api/v1/product-count")
        assert response.json() == {"total": 4}

    def test_products_by_category(self, client: TestClient) -> None:
        """Category listing includes the category and its products."""
        response = client.get("/api/v1/product-category/fantasy")

        assert response.status_code == 200
        data = response.json()
        assert data["category"]["id"] == "cat-a"
        assert [p["id"] for p in data["items"]] == ["p1", "p2", "p3"]

    def test_products_by_unknown_category(self, client: TestClient) -> None:
        """Unknown category returns 404."""
        response = client.get("/api/v1/product-category/poetry")

        assert response.status_code == 404
        assert response.json()["error_code"] == "CATEGORY_NOT_FOUND"


class TestCategories:
    """Tests for category endpoints."""

    def test_list_categories(self, client: TestClient) -> None:
        """Categories are listed by name."""
        response = client.get("/api/v1/category")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()["items"]] == ["Fantasy", "Mystery"]

    def test_get_category(self, client: TestClient) -> None:
        """Category is returned by slug."""
        response = client.get("/api/v1/category/mystery")
        assert response.json() == {"id": "cat-b", "name": "Mystery", "slug": "mystery"}

    def test_unknown_category(self, client: TestClient) -> None:
        """Unknown category returns 404."""
        response = client.get("/api/v1/category/poetry")
        assert response.status_code == 404
