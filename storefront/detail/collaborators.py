"""Contracts for the product detail view's enhancement collaborators.

Summarization, document export and speech playback are provided by the
hosting shell. The controller only depends on these protocols.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class SpeechCapability(str, Enum):
    """Result of feature-detecting the speech collaborator."""

    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ExportDocument:
    """Document handed to the exporter.

    Attributes:
        title: Document title (the product name).
        lines: Body lines in order.
        filename: Suggested download filename.
    """

    title: str
    lines: list[str]
    filename: str


class Summarizer(Protocol):
    """Produces a shorter version of arbitrary text."""

    async def summarize(self, text: str) -> str:
        """Summarize text, raising CollaboratorUnavailableError on failure."""
        ...


class DocumentExporter(Protocol):
    """Renders an ExportDocument into a downloadable file."""

    async def export(self, document: ExportDocument) -> None:
        """Render and deliver the document."""
        ...


class SpeechService(Protocol):
    """Plays text as speech."""

    def is_available(self) -> bool:
        """Report whether speech playback is supported here."""
        ...

    async def speak(self, text: str, lang: str) -> None:
        """Speak text in the given language tag."""
        ...


def detect_speech(speech: SpeechService | None) -> SpeechCapability:
    """Feature-detect the speech collaborator.

    Args:
        speech: Speech collaborator, if the shell provides one.

    Returns:
        AVAILABLE only if a collaborator exists and reports support.
    """
    if speech is None or not speech.is_available():
        return SpeechCapability.UNAVAILABLE
    return SpeechCapability.AVAILABLE
