"""Client-side comment ledger keyed by product slug."""

from storefront.comments.ledger import Comment, CommentLedger, storage_key

__all__ = ["Comment", "CommentLedger", "storage_key"]
