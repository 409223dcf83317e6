"""Presentation rules for the product detail view.

Pure functions: description truncation, price rendering and card
previews. Nothing here touches I/O.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

ELLIPSIS = "..."
NO_DESCRIPTION = "No description available."


class Affordance(str, Enum):
    """Toggle offered next to the description."""

    NONE = "none"
    EXPAND = "expand"
    COLLAPSE = "collapse"


@dataclass(frozen=True)
class DescriptionView:
    """What the description block shows.

    Attributes:
        text: Text to display.
        affordance: Toggle to offer, if any.
    """

    text: str
    affordance: Affordance


def describe(description: str | None, expanded: bool, threshold: int = 200) -> DescriptionView:
    """Apply the expand/collapse display rule.

    Text longer than ``threshold`` is cut to ``threshold`` characters plus
    an ellipsis until expanded; once expanded the full text is shown with
    a collapse toggle.

    Args:
        description: Product description.
        expanded: Whether the viewer expanded the text.
        threshold: Character count shown while collapsed.

    Returns:
        DescriptionView for rendering.
    """
    if not description:
        return DescriptionView(text=NO_DESCRIPTION, affordance=Affordance.NONE)

    if len(description) <= threshold:
        return DescriptionView(text=description, affordance=Affordance.NONE)

    if expanded:
        return DescriptionView(text=description, affordance=Affordance.COLLAPSE)

    return DescriptionView(text=description[:threshold] + ELLIPSIS, affordance=Affordance.EXPAND)


def format_price(amount: Decimal) -> str:
    """Render a price in US dollars with en-US grouping.

    Args:
        amount: Non-negative amount.

    Returns:
        Price such as ``"$1,234.50"``.
    """
    return f"${amount:,.2f}"


def preview(text: str | None, length: int = 60) -> str:
    """Shorten text for a related-product card.

    Args:
        text: Full text.
        length: Characters to keep.

    Returns:
        First ``length`` characters followed by an ellipsis.
    """
    return (text or "")[:length] + ELLIPSIS


def export_lines(description: str | None) -> list[str]:
    """Split a description into layout lines for export."""
    return (description or "").split("\n")
