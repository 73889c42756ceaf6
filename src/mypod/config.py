"""Configuration for mypod."""

from dataclasses import dataclass, field

ITUNES_SEARCH_URL = "https://itunes.apple.com/search"

DEFAULT_SEARCH_TERMS: tuple[str, ...] = (
    "the+war+on+drugs",
    "refused",
    "thrice",
    "16+horsepower",
    "viagra+boys",
    "geese",
    "ghost",
    "run+the+jewels",
    "rammstein",
    "salvatore+ganacci",
    "baroness",
)

# Bootstrap playlists, matched by name
LIBRARY_PLAYLIST = "Library"
FAVORITES_PLAYLIST = "Favorites"


@dataclass(frozen=True)
class CatalogConfig:
    """iTunes Search API configuration.

    Attributes:
        base_url: Search endpoint URL.
        timeout: Request timeout in seconds.
        limit: Maximum number of results requested per search term.
    """

    base_url: str = ITUNES_SEARCH_URL
    timeout: float = 10.0
    limit: int = 20


@dataclass(frozen=True)
class IngestionConfig:
    """Library ingestion configuration.

    Attributes:
        search_terms: Artist terms ingested in order, one request each.
        library_playlist: Name of the playlist seeded with every song.
        favorites_playlist: Name of the playlist created empty.
    """

    search_terms: tuple[str, ...] = field(default=DEFAULT_SEARCH_TERMS)
    library_playlist: str = LIBRARY_PLAYLIST
    favorites_playlist: str = FAVORITES_PLAYLIST
