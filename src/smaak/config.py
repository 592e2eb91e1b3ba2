"""
Smaak - Configuration and settings.

Settings are read from the environment and an optional .env file.
Catalog source selection lives here so the analyzer never touches the
network unless SMAAK_CATALOG_SOURCE=supabase.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    smaak_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Catalog
    # static   - packaged JSON ontology (or SMAAK_CATALOG_PATH directory)
    # supabase - ingredients tables of the backend
    smaak_catalog_source: Literal["static", "supabase"] = "static"
    smaak_catalog_path: Path | None = None

    # Supabase (only needed for the supabase catalog source)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None

    # Analysis
    smaak_max_suggestions: int = 8
    smaak_suggestions_per_element: int = 3
    smaak_strict_ingredients: bool = False  # Raise on unknown names instead of ignoring

    @property
    def is_development(self) -> bool:
        return self.smaak_env == "development"

    @property
    def is_production(self) -> bool:
        return self.smaak_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
