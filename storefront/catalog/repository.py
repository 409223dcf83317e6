"""Product repository for database operations.

Provides read queries over products and categories, plus the bulk
insert used by ingestion.
"""

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Category, Product


@dataclass
class ProductPhoto:
    """Binary image content for a product."""

    data: bytes
    content_type: str


class ProductRepository:
    """Repository for Product and Category database operations.

    Natural order for products is insertion order (created_at ascending);
    browse listings reverse it so the newest products come first.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            product = await repo.get_by_slug("story-one")
            related = await repo.find_related(product.id, product.category_id, limit=3)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save_all(self, items: Sequence[Category | Product]) -> Sequence[Category | Product]:
        """Save categories and products to database.

        Args:
            items: Entities to save.

        Returns:
            Saved entities.
        """
        self.session.add_all(items)
        await self.session.flush()
        return items

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(select(Product).where(Product.slug == slug))
        return result.scalar_one_or_none()

    async def find_related(
        self,
        product_id: str,
        category_id: str,
        limit: int,
    ) -> Sequence[Product]:
        """Find products in a category, excluding one product.

        Args:
            product_id: Product to exclude.
            category_id: Category to match.
            limit: Maximum results.

        Returns:
            Up to ``limit`` products in natural order.
        """
        query = (
            select(Product)
            .where(Product.category_id == category_id, Product.id != product_id)
            .order_by(Product.created_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_all(self, limit: int = 50, offset: int = 0) -> Sequence[Product]:
        """Find products newest first.

        Args:
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of products.
        """
        query = select(Product).order_by(Product.created_at.desc()).limit(limit).offset(offset)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_by_category(self, category_id: str) -> Sequence[Product]:
        """Find all products in a category in natural order.

        Args:
            category_id: Category ID.

        Returns:
            Sequence of products.
        """
        query = (
            select(Product)
            .where(Product.category_id == category_id)
            .order_by(Product.created_at.asc())
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self) -> int:
        """Count all products.

        Returns:
            Product count.
        """
        result = await self.session.execute(select(func.count(Product.id)))
        return result.scalar_one()

    async def get_photo(self, product_id: str) -> ProductPhoto | None:
        """Get photo bytes for a product.

        Args:
            product_id: Product ID.

        Returns:
            ProductPhoto if the product exists and has one, None otherwise.
        """
        query = select(Product.photo_data, Product.photo_content_type).where(
            Product.id == product_id
        )
        row = (await self.session.execute(query)).one_or_none()
        if row is None or row.photo_data is None:
            return None
        return ProductPhoto(
            data=row.photo_data,
            content_type=row.photo_content_type or "application/octet-stream",
        )

    async def list_categories(self) -> Sequence[Category]:
        """List categories ordered by name.

        Returns:
            Sequence of categories.
        """
        result = await self.session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()

    async def get_category_by_slug(self, slug: str) -> Category | None:
        """Get category by slug.

        Args:
            slug: Category slug.

        Returns:
            Category if found, None otherwise.
        """
        result = await self.session.execute(select(Category).where(Category.slug == slug))
        return result.scalar_one_or_none()

    async def product_keys(self) -> tuple[set[str], set[str]]:
        """Get the ids and slugs already used by products.

        Returns:
            Tuple of (ids, slugs).
        """
        result = await self.session.execute(select(Product.id, Product.slug))
        rows = result.all()
        return {row.id for row in rows}, {row.slug for row in rows}

    async def delete_all(self) -> int:
        """Delete every product and category.

        Returns:
            Number of deleted products.
        """
        count = await self.count()
        await self.session.execute(delete(Product))
        await self.session.execute(delete(Category))
        await self.session.flush()
        return count
