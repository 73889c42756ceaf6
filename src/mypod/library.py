"""Library container wiring repositories, catalog and ingestion together."""

import logging
from dataclasses import dataclass

from sqlalchemy import Engine

from mypod.catalog.client import CatalogProtocol, ItunesClient
from mypod.catalog.cover import CoverFetcher
from mypod.config import CatalogConfig, IngestionConfig
from mypod.db import (
    AlbumRepository,
    ArtistRepository,
    PlaylistRepository,
    SongRepository,
    init_db,
)
from mypod.models import IngestionSummary
from mypod.services.ingestion import LibraryInitializer

logger = logging.getLogger(__name__)


@dataclass
class Library:
    """Container for the repositories and services sharing one engine.

    Create with ``create_library()``; call ``close()`` when done.
    """

    engine: Engine
    artists: ArtistRepository
    albums: AlbumRepository
    songs: SongRepository
    playlists: PlaylistRepository
    initializer: LibraryInitializer
    catalog: CatalogProtocol
    covers: CoverFetcher | None = None

    def init(self) -> IngestionSummary:
        """Populate the library if empty and bootstrap default playlists."""
        return self.initializer.init()

    def close(self) -> None:
        """Release HTTP clients and database connections."""
        if isinstance(self.catalog, ItunesClient):
            self.catalog.close()
        if self.covers is not None:
            self.covers.close()
        self.engine.dispose()
        logger.debug("Library closed")

    def __enter__(self) -> "Library":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def build_library(
    engine: Engine,
    catalog: CatalogProtocol | None = None,
    catalog_config: CatalogConfig | None = None,
    ingestion_config: IngestionConfig | None = None,
    fetch_covers: bool = False,
) -> Library:
    """Create tables if needed and wire a Library around ``engine``.

    Args:
        engine: SQLAlchemy engine for the library database.
        catalog: Optional catalog client. An ItunesClient is created if
            not provided.
        catalog_config: Configuration for the created ItunesClient and
            cover fetcher.
        ingestion_config: Search terms and bootstrap playlist names.
        fetch_covers: Whether new albums get their cover art downloaded.

    Returns:
        A ready-to-use Library.
    """
    init_db(engine)
    catalog_config = catalog_config or CatalogConfig()
    catalog = catalog or ItunesClient(catalog_config)
    covers = CoverFetcher(timeout=catalog_config.timeout) if fetch_covers else None

    artists = ArtistRepository(engine)
    albums = AlbumRepository(engine)
    songs = SongRepository(engine)
    playlists = PlaylistRepository(engine)
    initializer = LibraryInitializer(
        catalog,
        artists,
        albums,
        songs,
        playlists,
        config=ingestion_config,
        covers=covers,
    )
    return Library(
        engine=engine,
        artists=artists,
        albums=albums,
        songs=songs,
        playlists=playlists,
        initializer=initializer,
        catalog=catalog,
        covers=covers,
    )
