"""API schemas for the storefront catalog.

Pydantic models for response serialization.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Catalog Schemas
# ============================================================================


class CategorySchema(BaseModel):
    """Category representation."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str


class ProductSchema(BaseModel):
    """Product representation with nested category.

    The photo is not embedded; fetch it from the product-photo endpoint.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    slug: str
    name: str
    description: str
    price: Decimal = Field(..., ge=0, description="Amount in major currency units")
    category: CategorySchema
    created_at: datetime


class ProductListResponse(BaseModel):
    """List of products."""

    items: list[ProductSchema]


class PaginatedProductsResponse(BaseModel):
    """Page of products, newest first."""

    items: list[ProductSchema]
    total: int = Field(..., description="Total number of products")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    has_more: bool = Field(..., description="Whether there are more pages")


class ProductCountResponse(BaseModel):
    """Total product count."""

    total: int


class CategoryProductsResponse(BaseModel):
    """A category and its products."""

    category: CategorySchema
    items: list[ProductSchema]


class CategoryListResponse(BaseModel):
    """List of categories."""

    items: list[CategorySchema]
