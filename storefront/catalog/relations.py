"""Related product discovery.

A product is related to another when both share a category. The finder
works over any catalog store, local or remote.
"""

from collections.abc import Sequence
from typing import Any, Protocol

import structlog

logger = structlog.get_logger()


class CatalogStore(Protocol):
    """Read contract shared by the catalog service and the catalog client."""

    async def get_product_by_slug(self, slug: str) -> Any:
        """Get product by slug, raising ProductNotFoundError if absent."""
        ...

    async def get_related_products(
        self,
        product_id: str,
        category_id: str,
        limit: int,
    ) -> Sequence[Any]:
        """Get up to ``limit`` other products in the category."""
        ...


async def find_related(store: CatalogStore, product: Any, limit: int) -> list[Any]:
    """Find products sharing the product's category.

    Args:
        store: Catalog store to query.
        product: Reference product with ``id`` and ``category``.
        limit: Maximum results.

    Returns:
        Related products, never including ``product`` itself, at most
        ``limit`` long. Empty if ``limit`` is not positive or the product
        has no category.
    """
    if limit <= 0:
        return []

    category = getattr(product, "category", None)
    if category is None:
        logger.warning(
            "Product has no category, skipping related lookup",
            product_id=product.id,
        )
        return []

    candidates = await store.get_related_products(product.id, category.id, limit)
    return [p for p in candidates if p.id != product.id][:limit]
