"""Gemini-backed summarizer for product descriptions.

The generative client is created by the hosting shell and passed in, so
its API key and lifecycle stay outside this module.
"""

import structlog
from google import genai

from storefront.domain.exceptions import CollaboratorUnavailableError
from storefront.infrastructure.config import settings

logger = structlog.get_logger()

PROMPT_TEMPLATE = "Summarize the following: {text}"


class GeminiSummarizer:
    """Summarizes text with a Gemini model.

    Example usage:
        client = genai.Client(api_key=settings.gemini_api_key)
        summarizer = GeminiSummarizer(client)
        summary = await summarizer.summarize(product.description)
    """

    def __init__(self, client: genai.Client, model: str | None = None) -> None:
        """Initialize summarizer.

        Args:
            client: Configured google-genai client.
            model: Model name; defaults to the configured model.
        """
        self.client = client
        self.model = model or settings.gemini_model

    async def summarize(self, text: str) -> str:
        """Summarize text.

        Args:
            text: Text to summarize.

        Returns:
            Summary text.

        Raises:
            CollaboratorUnavailableError: If the model call fails or
                returns no text.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=PROMPT_TEMPLATE.format(text=text),
            )
        except Exception as e:
            logger.error(
                "Gemini request failed",
                model=self.model,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise CollaboratorUnavailableError("summarizer", str(e)) from e

        summary = (getattr(response, "text", "") or "").strip()
        if not summary:
            logger.warning("Gemini returned empty summary", model=self.model)
            raise CollaboratorUnavailableError("summarizer", "empty response")

        logger.info("Summary generated", model=self.model, chars=len(summary))
        return summary


def create_summarizer(api_key: str | None = None) -> GeminiSummarizer | None:
    """Build a summarizer from configuration.

    Args:
        api_key: Gemini API key; defaults to the configured key.

    Returns:
        GeminiSummarizer, or None when no key is configured.
    """
    key = api_key or settings.gemini_api_key
    if not key:
        logger.info("Gemini API key not configured, summaries disabled")
        return None
    return GeminiSummarizer(genai.Client(api_key=key))
