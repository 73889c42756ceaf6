"""Application settings using pydantic-settings."""

from functools import cache
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mypod.config import (
    DEFAULT_SEARCH_TERMS,
    FAVORITES_PLAYLIST,
    ITUNES_SEARCH_URL,
    LIBRARY_PLAYLIST,
    CatalogConfig,
    IngestionConfig,
)
from mypod.db.engine import DB_FILE

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MYPOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data directory (required, set via MYPOD_ROOT)
    root: Path = Field(description="Data directory holding the library database")

    log_level: LogLevel = Field(default="INFO", description="Log level")

    # Catalog settings
    catalog_url: str = Field(
        default=ITUNES_SEARCH_URL, description="iTunes search endpoint"
    )
    catalog_timeout: float = Field(
        default=10.0, gt=0, description="Catalog request timeout in seconds"
    )
    catalog_limit: int = Field(
        default=20, ge=1, le=200, description="Results requested per search term"
    )

    # Ingestion settings
    search_terms: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SEARCH_TERMS),
        description="Artist terms ingested into an empty library, in order",
    )
    fetch_covers: bool = Field(
        default=True, description="Download album cover art during ingestion"
    )
    library_playlist: str = Field(
        default=LIBRARY_PLAYLIST, min_length=1, description="Library playlist name"
    )
    favorites_playlist: str = Field(
        default=FAVORITES_PLAYLIST, min_length=1, description="Favorites playlist name"
    )

    @field_validator("search_terms")
    @classmethod
    def non_empty_terms(cls, v: list[str]) -> list[str]:
        """Drop blank terms and require at least one."""
        terms = [t.strip() for t in v if t and t.strip()]
        if not terms:
            raise ValueError("must have at least one search term")
        return terms

    @property
    def db_path(self) -> Path:
        return self.root / DB_FILE

    @property
    def catalog(self) -> CatalogConfig:
        return CatalogConfig(
            base_url=self.catalog_url,
            timeout=self.catalog_timeout,
            limit=self.catalog_limit,
        )

    @property
    def ingestion(self) -> IngestionConfig:
        return IngestionConfig(
            search_terms=tuple(self.search_terms),
            library_playlist=self.library_playlist,
            favorites_playlist=self.favorites_playlist,
        )


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()  # type: ignore[call-arg]
