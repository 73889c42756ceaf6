"""Database module: engine setup, table models and repositories."""

from mypod.db.albums import AlbumRepository
from mypod.db.artists import ArtistRepository
from mypod.db.engine import DB_FILE, create_db_engine, create_memory_engine, init_db
from mypod.db.models import AlbumRow, ArtistRow, PlaylistRow, PlaylistSongLink, SongRow
from mypod.db.playlists import PlaylistRepository
from mypod.db.songs import SongRepository

__all__ = [
    "DB_FILE",
    "AlbumRepository",
    "AlbumRow",
    "ArtistRepository",
    "ArtistRow",
    "PlaylistRepository",
    "PlaylistRow",
    "PlaylistSongLink",
    "SongRepository",
    "SongRow",
    "create_db_engine",
    "create_memory_engine",
    "init_db",
]
