"""Library ingestion: catalog import and default playlist bootstrap."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from mypod.catalog.client import CatalogProtocol
from mypod.catalog.models import CatalogRecord
from mypod.config import IngestionConfig
from mypod.db import (
    AlbumRepository,
    ArtistRepository,
    PlaylistRepository,
    SongRepository,
)
from mypod.exceptions import IngestionError, MyPodError
from mypod.models import Album, Artist, IngestionSummary, Song

logger = logging.getLogger(__name__)


class CoverFetcherProtocol(Protocol):
    """Cover art source used while ingesting new albums."""

    def fetch(self, url: str | None) -> bytes | None:
        """Return image bytes, or None when unavailable."""
        ...


@dataclass
class _Counts:
    artists: int = 0
    albums: int = 0
    songs: int = 0
    terms: list[str] = field(default_factory=list)


class LibraryInitializer:
    """Populates an empty library from the catalog.

    Terms are ingested one at a time, in order. Every entity is inserted
    only if no entity with the same natural id is stored yet, so records
    shared between terms (or repeated within one) are stored once.

    Failures are not retried and nothing is rolled back: if term 5 of 11
    fails, terms 1-4 remain stored and the error propagates.
    """

    def __init__(
        self,
        catalog: CatalogProtocol,
        artists: ArtistRepository,
        albums: AlbumRepository,
        songs: SongRepository,
        playlists: PlaylistRepository,
        config: IngestionConfig | None = None,
        covers: CoverFetcherProtocol | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            catalog: Catalog client used for searching.
            artists: Artist repository.
            albums: Album repository.
            songs: Song repository.
            playlists: Playlist repository.
            config: Optional ingestion configuration. Uses defaults if not provided.
            covers: Optional cover fetcher. Albums are stored without cover
                art when not provided.
        """
        self._catalog = catalog
        self._artists = artists
        self._albums = albums
        self._songs = songs
        self._playlists = playlists
        self._config = config or IngestionConfig()
        self._covers = covers

    def init(self) -> IngestionSummary:
        """Ingest the catalog if the library is empty, then bootstrap playlists.

        Safe to call repeatedly: with songs already stored the catalog is
        not contacted, and the bootstrap playlists are only created when
        missing.

        Returns:
            Summary of what this run added.

        Raises:
            IngestionError: If fetching or storing any term fails. The
                original error is chained as ``__cause__``.
        """
        counts = _Counts()
        skipped = self._songs.count() > 0
        if skipped:
            logger.info("Library already has songs, skipping catalog ingestion")
        else:
            for term in self._config.search_terms:
                self._ingest_term(term, counts)
                counts.terms.append(term)
            logger.info(
                "Ingested %d terms: %d artists, %d albums, %d songs",
                len(counts.terms),
                counts.artists,
                counts.albums,
                counts.songs,
            )

        created = self._bootstrap_playlists()

        return IngestionSummary(
            skipped=skipped,
            terms=counts.terms,
            artists_added=counts.artists,
            albums_added=counts.albums,
            songs_added=counts.songs,
            playlists_created=created,
        )

    def _ingest_term(self, term: str, counts: _Counts) -> None:
        """Fetch and store every matching record for a single term."""
        logger.debug("Ingesting term: %s", term)
        try:
            for record in self._catalog.search_songs(term):
                self._ingest_record(record, counts)
        except (MyPodError, SQLAlchemyError) as e:
            logger.error("Ingestion failed for term '%s': %s", term, e)
            raise IngestionError(term, str(e)) from e

    def _ingest_record(self, record: CatalogRecord, counts: _Counts) -> None:
        """Store a record's artist, album and song, each only if absent."""
        artist = Artist.from_record(record)
        if not self._artists.exists_by_id(artist.id):
            self._artists.save(artist)
            counts.artists += 1

        album = Album.from_record(record, artist)
        if not self._albums.exists_by_id(album.id):
            if self._covers is not None:
                album = Album.from_record(
                    record, artist, cover=self._covers.fetch(record.artwork_url)
                )
            self._albums.save(album)
            counts.albums += 1

        song = Song.from_record(record, album)
        if not self._songs.exists_by_id(song.id):
            self._songs.save(song)
            counts.songs += 1

    def _bootstrap_playlists(self) -> list[str]:
        """Create the default playlists that don't exist yet.

        The library playlist receives every song stored at this moment;
        songs ingested by later runs are not added to it.
        """
        created: list[str] = []

        library_name = self._config.library_playlist
        if self._playlists.find_by_name(library_name) is None:
            library = self._playlists.create_playlist(library_name)
            songs = self._songs.find_all()
            if songs:
                self._playlists.add_songs(library, songs)
            logger.info("Seeded playlist '%s' with %d songs", library.name, len(songs))
            created.append(library.name)

        favorites_name = self._config.favorites_playlist
        if self._playlists.find_by_name(favorites_name) is None:
            favorites = self._playlists.create_playlist(favorites_name)
            created.append(favorites.name)

        return created
