"""
Global configuration settings for the claim status service.

Combines dataset locations, Azure OpenAI connection options and logging
into one centralized module. All settings can be overridden via
environment variables or a `.env` file.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==== Azure OpenAI ====
    AZURE_OPENAI_ENDPOINT: Optional[str] = None
    AZURE_OPENAI_DEPLOYMENT: Optional[str] = None
    AZURE_OPENAI_API_VERSION: str = "2024-08-01-preview"

    # When no key is configured, a bearer token is acquired for this scope
    AZURE_OPENAI_API_KEY: Optional[str] = None
    AZURE_OPENAI_SCOPE: str = "https://cognitiveservices.azure.com/.default"

    AZURE_OPENAI_TIMEOUT: float = 30.0

    # ==== Datasets ====
    CLAIMS_PATH: str = "data/claims.json"
    NOTES_PATH: str = "data/notes.json"

    # ==== Logging ====
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Helper to get the current app settings instance."""
    return Settings()
