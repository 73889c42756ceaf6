"""Models for parsing iTunes Search API responses.

These are internal models used to parse and validate responses from
the catalog. They may change if the API changes.
"""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

__all__ = [
    "CatalogRecord",
]


class CatalogModel(BaseModel):
    """Base model for iTunes responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class CatalogRecord(CatalogModel):
    """A single song result from the search endpoint.

    Every field is optional at this level; entity construction decides
    which ones are required.
    """

    artist_id: int | None = Field(default=None, alias="artistId")
    collection_id: int | None = Field(default=None, alias="collectionId")
    track_id: int | None = Field(default=None, alias="trackId")
    track_name: str | None = Field(default=None, alias="trackName")
    artist_name: str | None = Field(default=None, alias="artistName")
    collection_name: str | None = Field(default=None, alias="collectionName")
    country: str | None = None
    primary_genre_name: str | None = Field(default=None, alias="primaryGenreName")
    release_date: datetime | None = Field(default=None, alias="releaseDate")
    track_count: int | None = Field(default=None, alias="trackCount")
    track_time_millis: int | None = Field(default=None, alias="trackTimeMillis")
    preview_url: str | None = Field(default=None, alias="previewUrl")
    artwork_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("artworkUrl100", "artworkUrl", "artwork_url"),
    )

    @property
    def release_year(self) -> int:
        """Year of release, or 0 when the catalog has no date."""
        return self.release_date.year if self.release_date else 0
