"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    api_version: str = "0.1.0"
    api_host: str = "127.0.0.1"
    api_port: int = 8080
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./storefront.db"

    # Catalog
    catalog_api_url: str = "http://localhost:8080"
    catalog_timeout: float = 10.0
    related_products_limit: int = 3
    products_per_page: int = 6
    catalog_seed: int = 42

    # Product detail presentation
    description_preview_chars: int = 200
    related_preview_chars: int = 60

    # Comments
    comment_storage_path: str = "./comments.sqlite3"

    # Collaborators
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    speech_language: str = "en-US"

    # Logging
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
