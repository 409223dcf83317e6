"""Catalog HTTP client for the product detail view.

Talks to the catalog REST API and normalizes responses into plain
dataclasses. Implements the same read contract as CatalogService.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx
import structlog

from storefront.domain.exceptions import CatalogFetchError, ProductNotFoundError
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

API_PREFIX = "/api/v1"


# ============================================================================
# Response Models
# ============================================================================


@dataclass
class CatalogCategory:
    """Category data from the catalog API."""

    id: str
    name: str
    slug: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "CatalogCategory":
        """Create from catalog API response.

        Args:
            data: API response data.

        Returns:
            CatalogCategory instance.
        """
        return cls(id=data["id"], name=data["name"], slug=data.get("slug"))


@dataclass
class CatalogProduct:
    """Product data from the catalog API."""

    id: str
    slug: str
    name: str
    description: str | None
    price: Decimal
    category: CatalogCategory | None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "CatalogProduct":
        """Create from catalog API response.

        Args:
            data: API response data.

        Returns:
            CatalogProduct instance.

        Raises:
            KeyError, TypeError, InvalidOperation: On malformed data.
        """
        category_data = data.get("category")
        return cls(
            id=data["id"],
            slug=data["slug"],
            name=data["name"],
            description=data.get("description"),
            price=Decimal(str(data["price"])),
            category=(
                CatalogCategory.from_api_response(category_data)
                if category_data
                else None
            ),
        )


# ============================================================================
# Catalog HTTP Client
# ============================================================================


class CatalogClient:
    """HTTP client for the catalog REST API.

    Example usage:
        client = CatalogClient("http://localhost:8080")
        product = await client.get_product_by_slug("the-silent-harbor")
        related = await client.get_related_products(
            product.id, product.category.id, limit=3
        )
        await client.close()
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        request_id: str | None = None,
    ) -> None:
        """Initialize catalog client.

        Args:
            base_url: Catalog API base URL.
            timeout: Request timeout in seconds.
            request_id: Optional request ID for correlation.
        """
        self.base_url = (base_url or settings.catalog_api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.catalog_timeout
        self.request_id = request_id
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.request_id:
                headers["X-Request-ID"] = self.request_id
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=headers,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Issue a GET request, mapping transport errors to CatalogFetchError."""
        try:
            client = await self._get_client()
            return await client.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.error("Catalog API request timeout", path=path, error=str(e))
            raise CatalogFetchError(f"Request timed out: {path}") from e
        except httpx.RequestError as e:
            logger.error("Catalog API request failed", path=path, error=str(e))
            raise CatalogFetchError(f"Request failed: {e}") from e

    async def get_product_by_slug(self, slug: str) -> CatalogProduct:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product with nested category.

        Raises:
            ProductNotFoundError: If the API reports 404.
            CatalogFetchError: On transport, server or decoding failure.
        """
        path = f"{API_PREFIX}/product/{slug}"
        response = await self._get_json(path)

        if response.status_code == 404:
            raise ProductNotFoundError(slug)

        if response.status_code != 200:
            raise CatalogFetchError(
                f"Failed to get product: {response.text}",
                response.status_code,
            )

        try:
            data = response.json()
            if not isinstance(data, dict):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            return CatalogProduct.from_api_response(data)
        except (ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as e:
            logger.error("Malformed product response", slug=slug, error=str(e))
            raise CatalogFetchError(f"Malformed product response for {slug}") from e

    async def get_related_products(
        self,
        product_id: str,
        category_id: str,
        limit: int,
    ) -> list[CatalogProduct]:
        """Get products sharing a category with a product.

        Args:
            product_id: Reference product ID.
            category_id: Category ID.
            limit: Maximum results.

        Returns:
            Related products, possibly empty.

        Raises:
            CatalogFetchError: On transport, server or decoding failure.
        """
        if limit <= 0:
            return []

        path = f"{API_PREFIX}/related-product/{product_id}/{category_id}"
        response = await self._get_json(path, params={"limit": limit})

        if response.status_code != 200:
            raise CatalogFetchError(
                f"Failed to get related products: {response.text}",
                response.status_code,
            )

        try:
            data = response.json()
            return [CatalogProduct.from_api_response(p) for p in data.get("items", [])]
        except (ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as e:
            logger.error(
                "Malformed related products response",
                product_id=product_id,
                error=str(e),
            )
            raise CatalogFetchError("Malformed related products response") from e

    def photo_url(self, product_id: str) -> str:
        """Build the image URL for a product.

        Args:
            product_id: Product ID.

        Returns:
            Absolute URL of the product photo.
        """
        return f"{self.base_url}{API_PREFIX}/product-photo/{product_id}"
