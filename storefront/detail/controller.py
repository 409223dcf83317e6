"""Product detail view controller.

Orchestrates a single product page: fetches the product and its related
set, loads the comment ledger, tracks description expansion, and drives
the summary, export and speech hooks. Collaborators are injected by the
hosting shell.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from storefront.catalog.relations import CatalogStore, find_related
from storefront.comments.ledger import Comment, CommentLedger
from storefront.detail.collaborators import (
    DocumentExporter,
    ExportDocument,
    SpeechCapability,
    SpeechService,
    Summarizer,
    detect_speech,
)
from storefront.detail.presentation import (
    DescriptionView,
    describe,
    export_lines,
    format_price,
    preview,
)
from storefront.domain.exceptions import CatalogFetchError, ProductNotFoundError
from storefront.infrastructure.catalog_client import CatalogClient
from storefront.infrastructure.config import settings
from storefront.infrastructure.storage import SqliteKeyValueStorage
from storefront.infrastructure.summarizer import create_summarizer

logger = structlog.get_logger()

SPEECH_UNAVAILABLE_NOTICE = "Speech is not supported or no description is available."
SUMMARY_UNAVAILABLE_NOTICE = "Summary is not available right now."
EXPORT_UNAVAILABLE_NOTICE = "Download is not available right now."


# ============================================================================
# View State
# ============================================================================


class ViewStatus(str, Enum):
    """Lifecycle of the primary product fetch."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class RelatedCard:
    """Display data for one related product."""

    slug: str
    name: str
    price: str
    excerpt: str


@dataclass
class DetailViewState:
    """Everything the detail page renders for one slug.

    Attributes:
        slug: Slug being displayed.
        status: Primary fetch status.
        product: Product, once loaded.
        related: Products sharing its category.
        comments: Comment log for the slug.
        expanded: Whether the description is expanded.
        summary: Summary text, once produced.
        summary_loading: Whether a summary request is in flight.
        notice: Last user-visible notice.
    """

    slug: str | None = None
    status: ViewStatus = ViewStatus.IDLE
    product: Any = None
    related: list[Any] = field(default_factory=list)
    comments: list[Comment] = field(default_factory=list)
    expanded: bool = False
    summary: str | None = None
    summary_loading: bool = False
    notice: str | None = None


# ============================================================================
# Controller
# ============================================================================


class ProductDetailController:
    """Controller for the product detail page.

    Each navigation replaces the view state. Responses that arrive for a
    slug the controller has since navigated away from are discarded.

    Example usage:
        controller = ProductDetailController(
            catalog=CatalogClient(),
            ledger=CommentLedger(SqliteKeyValueStorage("comments.sqlite3")),
            summarizer=GeminiSummarizer(genai.Client(api_key=key)),
        )
        await controller.open("the-silent-harbor")
        controller.expand()
        await controller.summarize()
    """

    def __init__(
        self,
        catalog: CatalogStore,
        ledger: CommentLedger,
        summarizer: Summarizer | None = None,
        exporter: DocumentExporter | None = None,
        speech: SpeechService | None = None,
        related_limit: int | None = None,
        preview_chars: int | None = None,
        speech_language: str | None = None,
    ) -> None:
        """Initialize controller.

        Args:
            catalog: Catalog store for product and related lookups.
            ledger: Comment ledger.
            summarizer: Optional summarization collaborator.
            exporter: Optional document export collaborator.
            speech: Optional speech collaborator.
            related_limit: Maximum related products to show.
            preview_chars: Description length shown while collapsed.
            speech_language: Language tag for speech playback.
        """
        self.catalog = catalog
        self.ledger = ledger
        self.summarizer = summarizer
        self.exporter = exporter
        self.speech = speech
        self.related_limit = (
            related_limit if related_limit is not None else settings.related_products_limit
        )
        self.preview_chars = (
            preview_chars if preview_chars is not None else settings.description_preview_chars
        )
        self.speech_language = speech_language or settings.speech_language
        self.state = DetailViewState()
        self._token = 0
        self._task: asyncio.Task[DetailViewState] | None = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _is_current(self, token: int) -> bool:
        return token == self._token

    async def open(self, slug: str) -> DetailViewState:
        """Load the page for a slug.

        The product is fetched first; the related lookup needs its id and
        category. A missing product or failed fetch sets the view status;
        a failed related lookup only empties the related list.

        Args:
            slug: Product slug.

        Returns:
            The view state for this slug.
        """
        self._token += 1
        token = self._token
        state = DetailViewState(
            slug=slug,
            status=ViewStatus.LOADING,
            comments=self.ledger.load(slug),
        )
        self.state = state

        try:
            product = await self.catalog.get_product_by_slug(slug)
        except ProductNotFoundError:
            if self._is_current(token):
                state.status = ViewStatus.NOT_FOUND
            logger.info("Product not found", slug=slug)
            return state
        except CatalogFetchError as e:
            if self._is_current(token):
                state.status = ViewStatus.ERROR
            logger.error("Product fetch failed", slug=slug, error=e.message)
            return state

        if not self._is_current(token):
            logger.debug("Discarding stale product response", slug=slug)
            return state

        state.product = product
        state.status = ViewStatus.READY

        try:
            related = await find_related(self.catalog, product, self.related_limit)
        except Exception as e:
            logger.warning(
                "Related products fetch failed",
                slug=slug,
                error_type=type(e).__name__,
                error=str(e),
            )
            related = []

        if not self._is_current(token):
            logger.debug("Discarding stale related response", slug=slug)
            return state

        state.related = related
        return state

    def navigate(self, slug: str) -> "asyncio.Task[DetailViewState]":
        """Start loading a slug, cancelling any load still in flight.

        Must be called from a running event loop.

        Args:
            slug: Product slug.

        Returns:
            Task running the load.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self.open(slug))
        return self._task

    # ------------------------------------------------------------------
    # Description
    # ------------------------------------------------------------------

    def expand(self) -> None:
        """Show the full description."""
        self.state.expanded = True

    def collapse(self) -> None:
        """Show the truncated description."""
        self.state.expanded = False

    def description_view(self) -> DescriptionView:
        """Get the description as it should be displayed."""
        description = getattr(self.state.product, "description", None)
        return describe(description, self.state.expanded, self.preview_chars)

    def price_text(self) -> str | None:
        """Get the product price rendered for display."""
        if self.state.product is None:
            return None
        return format_price(self.state.product.price)

    def related_cards(self) -> list[RelatedCard]:
        """Get display data for the related products."""
        return [
            RelatedCard(
                slug=p.slug,
                name=p.name,
                price=format_price(p.price),
                excerpt=preview(p.description, settings.related_preview_chars),
            )
            for p in self.state.related
        ]

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def submit_comment(self, author: str, text: str) -> list[Comment]:
        """Add a comment to the current slug's ledger.

        Args:
            author: Commenter display name.
            text: Comment body.

        Returns:
            The comment log after submission.
        """
        if self.state.slug is None:
            return []
        self.state.comments = self.ledger.append(self.state.slug, author, text)
        return self.state.comments

    # ------------------------------------------------------------------
    # Enhancement hooks
    # ------------------------------------------------------------------

    async def summarize(self) -> str | None:
        """Summarize the current description.

        Failures are logged and leave ``summary`` unset.

        Returns:
            The summary, or None if none was produced.
        """
        state = self.state
        description = getattr(state.product, "description", None)
        if not description:
            return None

        if self.summarizer is None:
            state.notice = SUMMARY_UNAVAILABLE_NOTICE
            logger.warning("No summarizer configured", slug=state.slug)
            return None

        state.summary_loading = True
        try:
            summary = await self.summarizer.summarize(description)
        except Exception as e:
            logger.error(
                "Summary failed",
                slug=state.slug,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None
        finally:
            state.summary_loading = False

        if state is not self.state:
            logger.debug("Discarding stale summary", slug=state.slug)
            return None

        state.summary = summary
        return summary

    async def export(self) -> ExportDocument | None:
        """Hand the product name and description to the exporter.

        Returns:
            The exported document, or None if nothing was exported.
        """
        product = self.state.product
        if product is None:
            return None

        if self.exporter is None:
            self.state.notice = EXPORT_UNAVAILABLE_NOTICE
            logger.warning("No exporter configured", slug=self.state.slug)
            return None

        document = ExportDocument(
            title=product.name,
            lines=export_lines(product.description),
            filename=f"{product.name}.pdf",
        )
        try:
            await self.exporter.export(document)
        except Exception as e:
            self.state.notice = EXPORT_UNAVAILABLE_NOTICE
            logger.error(
                "Export failed",
                slug=self.state.slug,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None
        return document

    async def speak(self) -> bool:
        """Read the description aloud.

        Speech support is detected on every call. Without support or
        without a description this only sets a notice.

        Returns:
            True if playback was handed to the speech service.
        """
        description = getattr(self.state.product, "description", None)
        capability = detect_speech(self.speech)

        if capability is SpeechCapability.UNAVAILABLE or not description:
            logger.info(
                "Speech skipped",
                slug=self.state.slug,
                capability=capability.value,
                has_description=bool(description),
            )
            self.state.notice = SPEECH_UNAVAILABLE_NOTICE
            return False

        try:
            await self.speech.speak(description, self.speech_language)
        except Exception as e:
            self.state.notice = SPEECH_UNAVAILABLE_NOTICE
            logger.error(
                "Speech failed",
                slug=self.state.slug,
                error_type=type(e).__name__,
                error=str(e),
            )
            return False
        return True


def create_detail_controller(
    exporter: DocumentExporter | None = None,
    speech: SpeechService | None = None,
) -> ProductDetailController:
    """Build a controller wired from configuration.

    Uses the catalog API client, the SQLite comment store at
    ``settings.comment_storage_path`` and a Gemini summarizer when an API
    key is configured. Export and speech come from the hosting shell.

    Args:
        exporter: Optional document export collaborator.
        speech: Optional speech collaborator.

    Returns:
        Configured ProductDetailController.
    """
    return ProductDetailController(
        catalog=CatalogClient(),
        ledger=CommentLedger(SqliteKeyValueStorage(settings.comment_storage_path)),
        summarizer=create_summarizer(),
        exporter=exporter,
        speech=speech,
    )
