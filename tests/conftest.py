"""Test fixtures and configuration for mypod tests.

This module provides shared fixtures organized into:
- Database fixtures: In-memory SQLite engine and repositories
- Catalog fixtures: Raw record builders and a fake catalog client
- Entity fixtures: Stored artist/album/song graph for repository tests
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from typing import Any

import pytest
from sqlalchemy.engine import Engine

from mypod.catalog.models import CatalogRecord
from mypod.config import IngestionConfig
from mypod.db import (
    AlbumRepository,
    ArtistRepository,
    PlaylistRepository,
    SongRepository,
    create_memory_engine,
    init_db,
)
from mypod.models import Album, Artist, Song
from mypod.services import LibraryInitializer

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create in-memory SQLite engine for tests."""
    engine = create_memory_engine()
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def artists(engine: Engine) -> ArtistRepository:
    return ArtistRepository(engine)


@pytest.fixture
def albums(engine: Engine) -> AlbumRepository:
    return AlbumRepository(engine)


@pytest.fixture
def songs(engine: Engine) -> SongRepository:
    return SongRepository(engine)


@pytest.fixture
def playlists(engine: Engine) -> PlaylistRepository:
    return PlaylistRepository(engine)


# =============================================================================
# Catalog Fixtures
# =============================================================================


def raw_record(
    artist_id: int = 5,
    artist_name: str | None = "Thrice",
    collection_id: int = 50,
    collection_name: str | None = "Vheissu",
    track_id: int = 500,
    track_name: str | None = "Image of the Invisible",
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw search result as returned by the iTunes API."""
    data: dict[str, Any] = {
        "wrapperType": "track",
        "kind": "song",
        "artistId": artist_id,
        "artistName": artist_name,
        "collectionId": collection_id,
        "collectionName": collection_name,
        "trackId": track_id,
        "trackName": track_name,
        "trackTimeMillis": 210000,
        "country": "USA",
        "primaryGenreName": "Rock",
        "releaseDate": "2005-10-18T07:00:00Z",
        "trackCount": 12,
        "previewUrl": f"https://audio.example.com/{track_id}.m4a",
    }
    data.update(extra)
    return data


@pytest.fixture
def make_record() -> Callable[..., CatalogRecord]:
    """Factory for parsed catalog records."""

    def _make_record(**kwargs: Any) -> CatalogRecord:
        return CatalogRecord.model_validate(raw_record(**kwargs))

    return _make_record


class FakeCatalog:
    """Fake catalog client returning canned records per search term.

    A term mapped to an exception raises it instead of returning records.
    """

    def __init__(
        self, results: dict[str, list[CatalogRecord] | Exception] | None = None
    ) -> None:
        self._results = results or {}
        self.search_calls: list[str] = []
        self.closed = False

    def search_songs(self, term: str) -> list[CatalogRecord]:
        self.search_calls.append(term)
        result = self._results.get(term, [])
        if isinstance(result, Exception):
            raise result
        return list(result)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def thrice_record(make_record: Callable[..., CatalogRecord]) -> CatalogRecord:
    """The single record used by the end-to-end ingestion example."""
    return make_record()


@pytest.fixture
def make_initializer(
    artists: ArtistRepository,
    albums: AlbumRepository,
    songs: SongRepository,
    playlists: PlaylistRepository,
) -> Callable[..., LibraryInitializer]:
    """Factory for initializers over the test repositories."""

    def _make_initializer(
        catalog: FakeCatalog,
        terms: tuple[str, ...] | None = None,
        covers: Any = None,
    ) -> LibraryInitializer:
        config = IngestionConfig(search_terms=terms or tuple(catalog._results))
        return LibraryInitializer(
            catalog, artists, albums, songs, playlists, config=config, covers=covers
        )

    return _make_initializer


# =============================================================================
# Entity Fixtures
# =============================================================================


@pytest.fixture
def stored_graph(
    artists: ArtistRepository, albums: AlbumRepository, songs: SongRepository
) -> dict[str, Any]:
    """Store two artists, three albums and four songs.

    Layout:
        Thrice (5): Vheissu (50, Rock) -> 500, 501; Beggars (51, Alternative) -> 510
        Baroness (7): Purple (70, Metal) -> 700
    """
    thrice = Artist(id=5, name="Thrice", country="USA")
    baroness = Artist(id=7, name="Baroness", country="USA")
    vheissu = Album(id=50, name="Vheissu", artist_id=5, genre="Rock", release_year=2005)
    beggars = Album(
        id=51, name="Beggars", artist_id=5, genre="Alternative", release_year=2009
    )
    purple = Album(id=70, name="Purple", artist_id=7, genre="Metal", release_year=2015)
    tracks = [
        Song(id=500, title="Image of the Invisible", album_id=50, length_millis=210000),
        Song(id=501, title="Atlantic", album_id=50, length_millis=288000),
        Song(id=510, title="All the World Is a Stage", album_id=51),
        Song(id=700, title="Morningstar", album_id=70, length_millis=274000),
    ]

    for artist in (thrice, baroness):
        artists.save(artist)
    for album in (vheissu, beggars, purple):
        albums.save(album)
    for song in tracks:
        songs.save(song)

    return {
        "artists": {"thrice": thrice, "baroness": baroness},
        "albums": {"vheissu": vheissu, "beggars": beggars, "purple": purple},
        "songs": {s.id: s for s in tracks},
    }
