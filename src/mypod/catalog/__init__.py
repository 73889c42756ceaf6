"""iTunes catalog access.

Public API:
    ItunesClient - Search client filtering results by artist name
    CatalogProtocol - Client abstraction for dependency injection
    CatalogRecord - Parsed search result
    CoverFetcher - Cached album artwork downloads
    normalize_name, matches_artist - Artist-name matching rules
"""

from mypod.catalog.client import CatalogProtocol, ItunesClient
from mypod.catalog.cover import CoverFetcher
from mypod.catalog.matching import matches_artist, normalize_name
from mypod.catalog.models import CatalogRecord

__all__ = [
    "CatalogProtocol",
    "CatalogRecord",
    "CoverFetcher",
    "ItunesClient",
    "matches_artist",
    "normalize_name",
]
