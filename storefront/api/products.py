"""Product API endpoints.

Read-only catalog routes: product detail by slug, related products,
product photos and browse listings.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import (
    CategoryProductsResponse,
    CategorySchema,
    ErrorResponse,
    PaginatedProductsResponse,
    ProductCountResponse,
    ProductListResponse,
    ProductSchema,
)
from storefront.catalog.service import CatalogService
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/api/v1", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    return CatalogService(session)


CatalogDep = Annotated[CatalogService, Depends(get_catalog_service)]


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/product/{slug}",
    response_model=ProductSchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get product by slug",
)
async def get_product(slug: str, catalog: CatalogDep) -> ProductSchema:
    """Get product details, including its category, by slug."""
    product = await catalog.get_product_by_slug(slug)
    return ProductSchema.model_validate(product)


@router.get(
    "/related-product/{product_id}/{category_id}",
    response_model=ProductListResponse,
    summary="Get related products",
    description="Other products in the same category, excluding the given product.",
)
async def get_related_products(
    product_id: str,
    category_id: str,
    catalog: CatalogDep,
    limit: Annotated[int | None, Query(ge=0, le=50)] = None,
) -> ProductListResponse:
    """Get products sharing a category with a product."""
    products = await catalog.get_related_products(
        product_id,
        category_id,
        limit if limit is not None else settings.related_products_limit,
    )
    return ProductListResponse(items=[ProductSchema.model_validate(p) for p in products])


@router.get(
    "/product-photo/{product_id}",
    responses={404: {"model": ErrorResponse}},
    summary="Get product photo",
    response_class=Response,
)
async def get_product_photo(product_id: str, catalog: CatalogDep) -> Response:
    """Get the raw photo bytes for a product."""
    photo = await catalog.get_photo(product_id)
    return Response(content=photo.data, media_type=photo.content_type)


@router.get(
    "/products",
    response_model=PaginatedProductsResponse,
    summary="List products",
)
async def list_products(
    catalog: CatalogDep,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=100)] = None,
) -> PaginatedProductsResponse:
    """List products, newest first."""
    result = await catalog.list_products(
        page=page,
        page_size=page_size or settings.products_per_page,
    )
    return PaginatedProductsResponse(
        items=[ProductSchema.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_more=result.has_more,
    )


@router.get(
    "/product-count",
    response_model=ProductCountResponse,
    summary="Count products",
)
async def count_products(catalog: CatalogDep) -> ProductCountResponse:
    """Get the total number of products."""
    return ProductCountResponse(total=await catalog.count_products())


@router.get(
    "/product-category/{slug}",
    response_model=CategoryProductsResponse,
    responses={404: {"model": ErrorResponse}},
    summary="List products in a category",
)
async def get_products_by_category(slug: str, catalog: CatalogDep) -> CategoryProductsResponse:
    """Get a category and all of its products."""
    result = await catalog.get_products_by_category(slug)
    return CategoryProductsResponse(
        category=CategorySchema.model_validate(result.category),
        items=[ProductSchema.model_validate(p) for p in result.products],
    )
