"""Domain exceptions.

All storefront errors derive from StorefrontError so callers can catch
domain failures at the application or API layer. Each subclass carries a
machine-readable error code used in API error bodies.
"""

from typing import Any


class StorefrontError(Exception):
    """Base class for all storefront exceptions."""

    error_code = "STOREFRONT_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize storefront error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class NotFoundError(StorefrontError):
    """Base class for lookups that matched nothing.

    Terminal for the requesting view; never retried automatically.
    """

    error_code = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Raised when no product has the requested slug or id."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, key: str) -> None:
        """Initialize product not found error.

        Args:
            key: Slug or id that was looked up.
        """
        super().__init__(f"Product not found: {key}", details={"key": key})
        self.key = key


class CategoryNotFoundError(NotFoundError):
    """Raised when no category has the requested slug."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, slug: str) -> None:
        super().__init__(f"Category not found: {slug}", details={"slug": slug})
        self.slug = slug


class PhotoNotFoundError(NotFoundError):
    """Raised when a product has no stored photo."""

    error_code = "PHOTO_NOT_FOUND"

    def __init__(self, product_id: str) -> None:
        super().__init__(
            f"Photo not found for product: {product_id}",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class CatalogFetchError(StorefrontError):
    """Raised on transport or server failure talking to the catalog API.

    Transient. Not retried by the client; callers degrade the view.
    """

    error_code = "FETCH_FAILED"

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize catalog fetch error.

        Args:
            message: Error message.
            status_code: HTTP status code, if a response was received.
        """
        super().__init__(message, details={"status_code": status_code})
        self.status_code = status_code


class InvalidProductError(StorefrontError):
    """Raised when ingested product data violates catalog invariants."""

    error_code = "INVALID_PRODUCT"


# ============================================================================
# Comment Errors
# ============================================================================


class CommentRejectedError(StorefrontError):
    """Raised when a comment submission lacks an author or text."""

    error_code = "COMMENT_REJECTED"

    def __init__(self, slug: str, missing: list[str]) -> None:
        """Initialize comment rejected error.

        Args:
            slug: Product slug the comment was submitted for.
            missing: Names of the empty fields.
        """
        super().__init__(
            f"Comment for {slug} is missing: {', '.join(missing)}",
            details={"slug": slug, "missing": missing},
        )
        self.slug = slug
        self.missing = missing


class StorageCorruptError(StorefrontError):
    """Raised when persisted comment data cannot be decoded."""

    error_code = "STORAGE_CORRUPT"

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(
            f"Corrupt data under {key}: {reason}",
            details={"key": key, "reason": reason},
        )
        self.key = key


# ============================================================================
# Collaborator Errors
# ============================================================================


class CollaboratorUnavailableError(StorefrontError):
    """Raised when an enhancement collaborator is missing or failing.

    Covers the summarizer, document exporter and speech service. Never
    fatal: the failing feature is skipped for that interaction only.
    """

    error_code = "COLLABORATOR_UNAVAILABLE"

    def __init__(self, collaborator: str, message: str) -> None:
        """Initialize collaborator unavailable error.

        Args:
            collaborator: Collaborator name (e.g. "summarizer").
            message: Error message.
        """
        super().__init__(
            f"[{collaborator}] {message}",
            details={"collaborator": collaborator},
        )
        self.collaborator = collaborator
