"""Product Catalog.

Provides the catalog store (models, repository, service), related
product discovery, and sample catalog generation.
"""

from storefront.catalog.generator import CatalogGenerator, GeneratorConfig
from storefront.catalog.models import Category, Product, slugify
from storefront.catalog.relations import CatalogStore, find_related
from storefront.catalog.repository import ProductPhoto, ProductRepository
from storefront.catalog.service import CatalogService, CategoryProducts, PaginatedResult

__all__ = [
    # Models
    "Category",
    "Product",
    "slugify",
    # Generator
    "CatalogGenerator",
    "GeneratorConfig",
    # Repository
    "ProductPhoto",
    "ProductRepository",
    # Service
    "CatalogService",
    "CategoryProducts",
    "PaginatedResult",
    # Relations
    "CatalogStore",
    "find_related",
]
