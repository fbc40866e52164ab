"""
Runtime configuration and logging setup.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cognimap.core.types import MAX_INPUT_CHARS

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseSettings):
    """Application settings"""

    app_name: str = "cognimap"
    log_level: str = Field(default="INFO", description="Logging level")

    # Generation backend
    model_provider: str = Field(default="gemini", description="Generation backend: 'gemini' or 'apple'")
    gemini_model: str = Field(default="gemini-2.0-flash", description="Hosted Gemini model name")
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("COGNIMAP_GEMINI_API_KEY", "GEMINI_API_KEY", "GOOGLE_API_KEY"),
    )

    # Remote prompt configuration
    remote_config_url: str | None = Field(default=None, description="URL of a JSON key/value document")
    remote_config_token: str | None = Field(default=None, description="Bearer token sent to remote_config_url")
    firebase_project_id: str | None = None
    firebase_api_key: str | None = None
    firebase_app_id: str | None = None
    remote_config_timeout: float = Field(default=5.0, gt=0)
    remote_config_min_fetch_interval: float = Field(
        default=3600.0,
        ge=0,
        description="Minimum number of seconds between two remote config fetches",
    )

    # Actions
    max_input_chars: int = Field(default=MAX_INPUT_CHARS, ge=1)
    prompts_document_path: Path = Field(default=Path("prompts.json"), description="Editable prompt mirror")

    # Web search
    perplexity_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("COGNIMAP_PERPLEXITY_API_KEY", "PERPLEXITY_API_KEY"),
    )
    perplexity_model: str = "sonar"
    web_search_timeout: float = Field(default=30.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="COGNIMAP_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
        protected_namespaces=("settings_",),
    )

    @field_validator("model_provider")
    @classmethod
    def validate_model_provider(cls, v: str) -> str:
        provider = v.strip().lower()
        if provider not in {"gemini", "apple"}:
            raise ValueError(f"Unknown model provider '{v}'. Expected 'gemini' or 'apple'.")
        return provider

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{v}'.")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()


def configure_logging(settings: Settings) -> None:
    root = logging.getLogger("cognimap")
    root.setLevel(settings.log_level)

    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
