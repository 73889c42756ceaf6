"""Ingestion result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IngestionSummary(BaseModel):
    """Outcome of a library initialization run.

    Attributes:
        skipped: True when the library already had songs and bulk
            ingestion did not run.
        terms: Search terms that were fully ingested, in order.
        artists_added: Number of artists inserted.
        albums_added: Number of albums inserted.
        songs_added: Number of songs inserted.
        playlists_created: Names of bootstrap playlists created by this run.
    """

    model_config = ConfigDict(frozen=True)

    skipped: bool = False
    terms: list[str] = Field(default_factory=list)
    artists_added: int = 0
    albums_added: int = 0
    songs_added: int = 0
    playlists_created: list[str] = Field(default_factory=list)

    @property
    def total_added(self) -> int:
        """Total number of catalog entities inserted."""
        return self.artists_added + self.albums_added + self.songs_added
