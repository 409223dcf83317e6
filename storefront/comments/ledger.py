"""Per-product comment ledger.

An append-only, client-owned log of comments for each product slug,
persisted write-through to durable key/value storage under
``comments_<slug>``. Comments have no identifier of their own; their
identity is their position in the slug's log.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable

import structlog

from storefront.domain.exceptions import CommentRejectedError, StorageCorruptError
from storefront.infrastructure.storage import KeyValueStorage

logger = structlog.get_logger()

KEY_PREFIX = "comments_"

# Format produced by the legacy client (en-US toLocaleString)
LEGACY_TIMESTAMP_FORMAT = "%m/%d/%Y, %I:%M:%S %p"


def _parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 or legacy en-US timestamp as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = datetime.strptime(value, LEGACY_TIMESTAMP_FORMAT)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class Comment:
    """A single comment on a product.

    Attributes:
        author: Display name of the commenter.
        text: Comment body.
        created_at: Submission time (UTC), not user-editable.
    """

    author: str
    text: str
    created_at: datetime

    def to_dict(self) -> dict[str, str]:
        """Convert to the stored JSON shape."""
        return {
            "author": self.author,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Comment":
        """Create from the stored JSON shape.

        Entries written by the legacy web client used ``username`` and
        ``timestamp``; both spellings are accepted.

        Raises:
            KeyError, TypeError, ValueError: On malformed entries.
        """
        author = data.get("author", data.get("username"))
        created = data.get("created_at", data.get("timestamp"))
        if not isinstance(author, str) or not isinstance(data["text"], str):
            raise TypeError("author and text must be strings")
        return cls(author=author, text=data["text"], created_at=_parse_timestamp(created))


def storage_key(slug: str) -> str:
    """Build the storage key for a product's comments.

    Args:
        slug: Product slug.

    Returns:
        Key of the form ``comments_<slug>``.
    """
    return f"{KEY_PREFIX}{slug}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CommentLedger:
    """Append-only comment log keyed by product slug.

    Loading an unknown slug yields an empty log; stored data that cannot
    be decoded is treated the same way. Appending validates the
    submission, stamps it with the current time and writes the full
    sequence back before returning.

    Example usage:
        ledger = CommentLedger(SqliteKeyValueStorage("comments.sqlite3"))
        ledger.append("story-one", "Ann", "Great story")
        comments = ledger.load("story-one")
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize ledger.

        Args:
            storage: Durable key/value storage.
            clock: Source of submission timestamps.
        """
        self.storage = storage
        self.clock = clock

    def _decode(self, key: str, raw: str) -> list[Comment]:
        try:
            entries = json.loads(raw)
        except json.JSONDecodeError as e:
            raise StorageCorruptError(key, f"invalid JSON: {e.msg}") from e

        if not isinstance(entries, list):
            raise StorageCorruptError(key, "expected a list of comments")

        try:
            return [Comment.from_dict(entry) for entry in entries]
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise StorageCorruptError(key, f"malformed comment: {e}") from e

    def load(self, slug: str) -> list[Comment]:
        """Load comments for a product in insertion order.

        Args:
            slug: Product slug.

        Returns:
            Comments, oldest first. Empty when nothing is stored or the
            stored data is corrupt.
        """
        key = storage_key(slug)
        raw = self.storage.get(key)
        if raw is None:
            return []

        try:
            return self._decode(key, raw)
        except StorageCorruptError as e:
            logger.warning("Ignoring corrupt comment data", slug=slug, error=e.message)
            return []

    def _validate(self, slug: str, author: str, text: str) -> tuple[str, str]:
        author = (author or "").strip()
        text = (text or "").strip()
        missing = [name for name, value in (("author", author), ("text", text)) if not value]
        if missing:
            raise CommentRejectedError(slug, missing)
        return author, text

    def append(self, slug: str, author: str, text: str) -> list[Comment]:
        """Append a comment and persist the updated log.

        An empty author or text leaves the log untouched.

        Args:
            slug: Product slug.
            author: Commenter display name.
            text: Comment body.

        Returns:
            The full comment sequence after the call.
        """
        comments = self.load(slug)

        try:
            author, text = self._validate(slug, author, text)
        except CommentRejectedError as e:
            logger.info("Comment rejected", slug=slug, missing=e.missing)
            return comments

        created_at = self.clock()
        if comments and created_at < comments[-1].created_at:
            # Clock went backwards; keep timestamps non-decreasing
            created_at = comments[-1].created_at

        comments.append(Comment(author=author, text=text, created_at=created_at))
        self.storage.set(
            storage_key(slug),
            json.dumps([c.to_dict() for c in comments]),
        )

        logger.info("Comment added", slug=slug, count=len(comments))
        return comments
