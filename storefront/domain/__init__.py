"""Storefront domain layer.

Exceptions shared by the catalog service and the product detail client.
"""

from storefront.domain.exceptions import (
    CatalogFetchError,
    CategoryNotFoundError,
    CollaboratorUnavailableError,
    CommentRejectedError,
    InvalidProductError,
    NotFoundError,
    PhotoNotFoundError,
    ProductNotFoundError,
    StorageCorruptError,
    StorefrontError,
)

__all__ = [
    "CatalogFetchError",
    "CategoryNotFoundError",
    "CollaboratorUnavailableError",
    "CommentRejectedError",
    "InvalidProductError",
    "NotFoundError",
    "PhotoNotFoundError",
    "ProductNotFoundError",
    "StorageCorruptError",
    "StorefrontError",
]
