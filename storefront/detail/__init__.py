"""Product detail view: controller, presentation rules and collaborator contracts."""

from storefront.detail.collaborators import (
    DocumentExporter,
    ExportDocument,
    SpeechCapability,
    SpeechService,
    Summarizer,
    detect_speech,
)
from storefront.detail.controller import (
    DetailViewState,
    ProductDetailController,
    RelatedCard,
    ViewStatus,
    create_detail_controller,
)
from storefront.detail.presentation import (
    Affordance,
    DescriptionView,
    describe,
    format_price,
    preview,
)

__all__ = [
    # Collaborators
    "DocumentExporter",
    "ExportDocument",
    "SpeechCapability",
    "SpeechService",
    "Summarizer",
    "detect_speech",
    # Controller
    "DetailViewState",
    "ProductDetailController",
    "RelatedCard",
    "ViewStatus",
    "create_detail_controller",
    # Presentation
    "Affordance",
    "DescriptionView",
    "describe",
    "format_price",
    "preview",
]
