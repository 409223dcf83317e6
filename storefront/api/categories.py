"""Category API endpoints (read-only)."""

from fastapi import APIRouter

from storefront.api.products import CatalogDep
from storefront.api.schemas import CategoryListResponse, CategorySchema, ErrorResponse

router = APIRouter(prefix="/api/v1/category", tags=["Categories"])


@router.get("", response_model=CategoryListResponse, summary="List categories")
async def list_categories(catalog: CatalogDep) -> CategoryListResponse:
    """List all categories."""
    categories = await catalog.list_categories()
    return CategoryListResponse(items=[CategorySchema.model_validate(c) for c in categories])


@router.get(
    "/{slug}",
    response_model=CategorySchema,
    responses={404: {"model": ErrorResponse}},
    summary="Get category by slug",
)
async def get_category(slug: str, catalog: CatalogDep) -> CategorySchema:
    """Get a single category."""
    return CategorySchema.model_validate(await catalog.get_category(slug))
