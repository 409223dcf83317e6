"""Catalog service for product operations.

High-level service that combines repository queries with the catalog's
lookup rules. This is the server-side Catalog Store.
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.generator import CatalogGenerator, GeneratorConfig
from storefront.catalog.models import Category, Product
from storefront.catalog.repository import ProductPhoto, ProductRepository
from storefront.domain.exceptions import (
    CategoryNotFoundError,
    PhotoNotFoundError,
    ProductNotFoundError,
)

T = TypeVar("T")

logger = structlog.get_logger()


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return (self.total + self.page_size - 1) // self.page_size

    @property
    def has_more(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages


@dataclass
class CategoryProducts:
    """A category together with its products."""

    category: Category
    products: list[Product]


class CatalogService:
    """Service for catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            product = await service.get_product_by_slug("the-silent-harbor")
            related = await service.get_related_products(
                product.id, product.category_id, limit=3
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session
        self.repository = ProductRepository(session)

    async def get_product_by_slug(self, slug: str) -> Product:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product with its category loaded.

        Raises:
            ProductNotFoundError: If no product has this slug.
        """
        product = await self.repository.get_by_slug(slug)
        if product is None:
            raise ProductNotFoundError(slug)
        return product

    async def get_related_products(
        self,
        product_id: str,
        category_id: str,
        limit: int,
    ) -> list[Product]:
        """Get products sharing a category with a product.

        Relatedness is category equality only. The reference product is
        excluded by id and results are capped at ``limit``.

        Args:
            product_id: Reference product ID.
            category_id: Category to match.
            limit: Maximum results.

        Returns:
            Related products in natural order, possibly empty.
        """
        if limit <= 0:
            return []
        products = await self.repository.find_related(product_id, category_id, limit)
        return list(products)

    async def list_products(self, page: int = 1, page_size: int = 6) -> PaginatedResult[Product]:
        """List products newest first.

        Args:
            page: Page number (1-indexed).
            page_size: Items per page.

        Returns:
            Paginated product results.
        """
        products = await self.repository.find_all(
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        total = await self.repository.count()
        return PaginatedResult(
            items=list(products),
            total=total,
            page=page,
            page_size=page_size,
        )

    async def count_products(self) -> int:
        """Count products in the catalog."""
        return await self.repository.count()

    async def get_products_by_category(self, category_slug: str) -> CategoryProducts:
        """Get a category and all its products.

        Args:
            category_slug: Category slug.

        Returns:
            Category with products in natural order.

        Raises:
            CategoryNotFoundError: If no category has this slug.
        """
        category = await self.get_category(category_slug)
        products = await self.repository.find_by_category(category.id)
        return CategoryProducts(category=category, products=list(products))

    async def list_categories(self) -> list[Category]:
        """List all categories."""
        return list(await self.repository.list_categories())

    async def get_category(self, slug: str) -> Category:
        """Get category by slug.

        Raises:
            CategoryNotFoundError: If no category has this slug.
        """
        category = await self.repository.get_category_by_slug(slug)
        if category is None:
            raise CategoryNotFoundError(slug)
        return category

    async def get_photo(self, product_id: str) -> ProductPhoto:
        """Get photo content for a product.

        Args:
            product_id: Product ID.

        Returns:
            Photo bytes and content type.

        Raises:
            PhotoNotFoundError: If the product is missing or has no photo.
        """
        photo = await self.repository.get_photo(product_id)
        if photo is None:
            raise PhotoNotFoundError(product_id)
        return photo

    async def seed_catalog(
        self,
        config: GeneratorConfig | None = None,
        clear_existing: bool = True,
    ) -> dict[str, Any]:
        """Seed the catalog with generated sample data.

        Args:
            config: Generator configuration.
            clear_existing: Whether to delete existing data first. When
                False, stored categories are reused and generated products
                clashing with stored ones are skipped.

        Returns:
            Seeding result with counts.
        """
        config = config or GeneratorConfig()

        deleted = 0
        if clear_existing:
            deleted = await self.repository.delete_all()

        categories, products = CatalogGenerator(config).generate()
        skipped = 0
        if not clear_existing:
            categories, products, skipped = await self._merge_with_existing(categories, products)

        await self.repository.save_all(categories)
        await self.repository.save_all(products)
        await self.session.commit()

        logger.info(
            "Catalog seeded",
            seed=config.seed,
            deleted=deleted,
            categories=len(categories),
            products=len(products),
            skipped=skipped,
        )

        return {
            "seed": config.seed,
            "deleted": deleted,
            "categories_created": len(categories),
            "products_created": len(products),
            "skipped": skipped,
        }

    async def _merge_with_existing(
        self,
        categories: list[Category],
        products: list[Product],
    ) -> tuple[list[Category], list[Product], int]:
        """Fit a generated catalog around what is already stored.

        Generated categories whose slug exists are replaced by the stored
        category. Products whose id or slug is taken are dropped.

        Returns:
            Tuple of (new categories, new products, skipped product count).
        """
        stored = {c.slug: c for c in await self.repository.list_categories()}
        taken_ids, taken_slugs = await self.repository.product_keys()

        new_products: list[Product] = []
        for product in products:
            if product.id in taken_ids or product.slug in taken_slugs:
                product.category = None
                continue
            existing = stored.get(product.category.slug)
            if existing is not None:
                product.category = existing
            new_products.append(product)

        new_categories = [c for c in categories if c.slug not in stored]
        return new_categories, new_products, len(products) - len(new_products)
