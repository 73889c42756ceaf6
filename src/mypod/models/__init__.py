"""Data models for mypod.

Public API:
    Artist, Album, Song - Catalog entities keyed by natural id
    Playlist - User playlist keyed by surrogate id
    IngestionSummary - Result of a library ingestion run
"""

from mypod.models.domain import Album, Artist, Playlist, Song
from mypod.models.results import IngestionSummary

__all__ = [
    "Album",
    "Artist",
    "IngestionSummary",
    "Playlist",
    "Song",
]
