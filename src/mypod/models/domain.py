"""Domain models for mypod.

Artists, albums and songs are identified by the natural ids the catalog
assigns them. Equality and hashing compare only that id, so two instances
built from the same catalog record are the same entity whether or not
either has been stored. Parents are referenced by explicit foreign-key
fields; query results may additionally carry the resolved parent object,
which never takes part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from mypod.exceptions import ValidationError

if TYPE_CHECKING:
    from mypod.catalog.models import CatalogRecord


def _require(value: object, message: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(message)


@dataclass(frozen=True, eq=False)
class Artist:
    """Catalog artist."""

    id: int
    name: str
    country: str | None = None

    def __post_init__(self) -> None:
        _require(self.id, "Artist id is required")
        _require(self.name, "Artist name is required")

    @classmethod
    def from_record(cls, record: CatalogRecord) -> Artist:
        """Build an artist from a catalog record.

        Raises:
            ValidationError: If the record has no artistId or artistName.
        """
        return cls(
            id=record.artist_id,  # type: ignore[arg-type]
            name=record.artist_name,  # type: ignore[arg-type]
            country=record.country,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Artist):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((Artist, self.id))


@dataclass(frozen=True, eq=False)
class Album:
    """Catalog album (collection), owned by exactly one artist.

    Attributes:
        id: Catalog collectionId.
        name: Album title.
        artist_id: Owning artist's id.
        genre: Primary genre name.
        release_year: Year of release, 0 when unknown.
        track_count: Number of tracks the catalog reports for the album.
        cover: Cover art image bytes, if fetched.
        artist: Resolved owning artist (query results only).
    """

    id: int
    name: str
    artist_id: int
    genre: str | None = None
    release_year: int = 0
    track_count: int | None = None
    cover: bytes | None = field(default=None, repr=False)
    artist: Artist | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        _require(self.id, "Album id is required")
        _require(self.name, "Album name is required")
        _require(self.artist_id, "Album must belong to an artist")

    @classmethod
    def from_record(
        cls,
        record: CatalogRecord,
        artist: Artist,
        cover: bytes | None = None,
    ) -> Album:
        """Build an album owned by ``artist`` from a catalog record.

        Raises:
            ValidationError: If the record has no collectionId or collectionName.
        """
        return cls(
            id=record.collection_id,  # type: ignore[arg-type]
            name=record.collection_name,  # type: ignore[arg-type]
            artist_id=artist.id,
            genre=record.primary_genre_name,
            release_year=record.release_year,
            track_count=record.track_count,
            cover=cover,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Album):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((Album, self.id))


@dataclass(frozen=True, eq=False)
class Song:
    """Catalog track, owned by exactly one album."""

    id: int
    title: str
    album_id: int
    length_millis: int | None = None
    preview_url: str | None = None
    album: Album | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        _require(self.id, "Song id is required")
        _require(self.title, "Song title is required")
        _require(self.album_id, "Song must belong to an album")

    @classmethod
    def from_record(cls, record: CatalogRecord, album: Album) -> Song:
        """Build a song owned by ``album`` from a catalog record.

        Raises:
            ValidationError: If the record has no trackId or trackName.
        """
        return cls(
            id=record.track_id,  # type: ignore[arg-type]
            title=record.track_name,  # type: ignore[arg-type]
            album_id=album.id,
            length_millis=record.track_time_millis,
            preview_url=record.preview_url,
        )

    @property
    def formatted_length(self) -> str:
        """Track length as m:ss."""
        if not self.length_millis:
            return "0:00"
        minutes, seconds = divmod(self.length_millis // 1000, 60)
        return f"{minutes}:{seconds:02d}"

    @property
    def artist(self) -> Artist | None:
        """Resolved artist, when the album chain was loaded."""
        return self.album.artist if self.album else None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Song):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((Song, self.id))


@dataclass(frozen=True, eq=False)
class Playlist:
    """User playlist: a named set of song ids.

    The id is assigned by storage. Membership is an association only;
    a playlist never owns its songs.
    """

    id: int | None
    name: str
    song_ids: frozenset[int] = field(default_factory=frozenset)

    def __contains__(self, song: object) -> bool:
        song_id = song.id if isinstance(song, Song) else song
        return song_id in self.song_ids

    @property
    def song_count(self) -> int:
        """Number of member songs."""
        return len(self.song_ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Playlist):
            return NotImplemented
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash((Playlist, self.id))
