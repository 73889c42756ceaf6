"""mypod - Music library built from the iTunes catalog.

This library ingests songs from the iTunes Search API into a local SQLite
database as a deduplicated Artist/Album/Song graph, and manages playlists
over that graph.

Examples:
    Populate a library and browse it:
    ```python
    from mypod import create_library

    with create_library() as library:
        library.init()
        for song in library.songs.find_by_genre("Rock"):
            print(f"{song.artist.name} - {song.title}")
    ```

    Manage playlists:
    ```python
    road_trip = library.playlists.create_playlist("Road trip")
    library.playlists.add_song(road_trip, song)
    library.playlists.rename_playlist(road_trip, "Summer road trip")
    ```
"""

from mypod.catalog import CatalogRecord, ItunesClient, normalize_name
from mypod.config import CatalogConfig, IngestionConfig
from mypod.db import create_db_engine
from mypod.exceptions import (
    ConstraintError,
    IngestionError,
    MyPodError,
    NotFoundError,
    TransportError,
    ValidationError,
)
from mypod.library import Library, build_library
from mypod.models import Album, Artist, IngestionSummary, Playlist, Song
from mypod.services import LibraryInitializer
from mypod.settings import Settings, get_settings


def create_library(settings: Settings | None = None) -> Library:
    """Create a library backed by the configured SQLite database.

    This is the recommended way to create a library for application usage.
    It handles engine, client and repository instantiation internally.

    Args:
        settings: Optional settings. Loaded from the environment
            (``MYPOD_*`` variables and ``.env``) if not provided.

    Returns:
        A Library whose tables exist; call ``init()`` to populate it.
    """
    settings = settings or get_settings()
    return build_library(
        create_db_engine(settings.db_path),
        catalog_config=settings.catalog,
        ingestion_config=settings.ingestion,
        fetch_covers=settings.fetch_covers,
    )


__all__ = [
    "Album",
    "Artist",
    "CatalogConfig",
    "CatalogRecord",
    "ConstraintError",
    "IngestionConfig",
    "IngestionError",
    "IngestionSummary",
    "ItunesClient",
    "Library",
    "LibraryInitializer",
    "MyPodError",
    "NotFoundError",
    "Playlist",
    "Settings",
    "Song",
    "TransportError",
    "ValidationError",
    "build_library",
    "create_library",
    "get_settings",
    "normalize_name",
]
