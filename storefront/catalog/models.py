"""SQLAlchemy models for the product catalog.

Defines Category and Product tables. Validation happens at construction
so every product read back from the store has a category, a
non-negative price and a URL-safe slug.
"""

import re
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, LargeBinary, Numeric, String, Text
from sqlalchemy.orm import Mapped, deferred, mapped_column, relationship, validates

from storefront.domain.exceptions import InvalidProductError
from storefront.infrastructure.database import Base

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(value: str) -> str:
    """Derive a URL-safe slug from a display name.

    Args:
        value: Display name.

    Returns:
        Lowercase slug of ASCII letters, digits and single hyphens.
    """
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower())
    return slug.strip("-")


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Product category.

    Categories are shared by many products and outlive any one of them.
    This system only reads them; they are created during ingestion.

    Attributes:
        id: Unique category identifier.
        name: Display label.
        slug: URL-safe unique key.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)

    products: Mapped[list["Product"]] = relationship("Product", back_populates="category")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug})>"

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise InvalidProductError("Category name must not be empty")
        return value

    @validates("slug")
    def _validate_slug(self, key: str, value: str) -> str:
        if not value or not SLUG_PATTERN.match(value):
            raise InvalidProductError(
                f"Category slug is not URL-safe: {value!r}",
                details={"slug": value},
            )
        return value


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier, never reused.
        slug: URL-safe unique key used for routing and comment keying.
        name: Display name.
        description: Free text of unbounded length.
        price: Non-negative amount with two decimal places.
        category_id: Owning category.
        photo_data: Raw image bytes, loaded only by the photo endpoint.
        photo_content_type: MIME type of photo_data.
        created_at: Ingestion timestamp, defines natural order.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    slug: Mapped[str] = mapped_column(String(300), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    photo_data: Mapped[bytes | None] = deferred(mapped_column(LargeBinary, nullable=True))
    photo_content_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        index=True,
    )

    # Always joined so readers never see an unresolved category
    category: Mapped[Category] = relationship(
        "Category",
        back_populates="products",
        lazy="joined",
        innerjoin=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug}, name={self.name[:30]})>"

    @validates("name")
    def _validate_name(self, key: str, value: str) -> str:
        if not value or not value.strip():
            raise InvalidProductError("Product name must not be empty")
        return value

    @validates("slug")
    def _validate_slug(self, key: str, value: str) -> str:
        if not value or not SLUG_PATTERN.match(value):
            raise InvalidProductError(
                f"Product slug is not URL-safe: {value!r}",
                details={"slug": value},
            )
        return value

    @validates("price")
    def _validate_price(self, key: str, value: Decimal | int | str) -> Decimal:
        if value is None:
            raise InvalidProductError("Product price is required")
        price = Decimal(str(value)).quantize(Decimal("0.01"))
        if price < 0:
            raise InvalidProductError(
                f"Product price must not be negative: {price}",
                details={"price": str(price)},
            )
        return price
