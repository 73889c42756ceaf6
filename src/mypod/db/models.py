"""Database models.

Rows hold explicit foreign-key columns and no ORM relationships; the
repositories load parents with joins and perform cascades themselves.
"""

from sqlalchemy import Column, LargeBinary
from sqlmodel import Field, SQLModel

from mypod.models.domain import Album, Artist, Playlist, Song


def genre_key(genre: str | None) -> str | None:
    """Case-folded genre used for lookups, None when missing or blank."""
    if genre is None or not genre.strip():
        return None
    return genre.strip().casefold()


class ArtistRow(SQLModel, table=True):
    """Artist keyed by the catalog artistId."""

    __tablename__ = "artist"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    country: str | None = None

    @classmethod
    def from_domain(cls, artist: Artist) -> "ArtistRow":
        return cls(id=artist.id, name=artist.name, country=artist.country)

    def to_domain(self) -> Artist:
        return Artist(id=self.id, name=self.name, country=self.country)


class AlbumRow(SQLModel, table=True):
    """Album keyed by the catalog collectionId."""

    __tablename__ = "album"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    name: str
    genre: str | None = None
    # SQLite lower() only folds ASCII, so lookups go through this column
    genre_key: str | None = Field(default=None, index=True)
    year: int = 0
    track_count: int | None = None
    cover: bytes | None = Field(default=None, sa_column=Column(LargeBinary))
    artist_id: int = Field(foreign_key="artist.id", index=True)

    @classmethod
    def from_domain(cls, album: Album) -> "AlbumRow":
        return cls(
            id=album.id,
            name=album.name,
            genre=album.genre,
            genre_key=genre_key(album.genre),
            year=album.release_year,
            track_count=album.track_count,
            cover=album.cover,
            artist_id=album.artist_id,
        )

    def to_domain(self, artist: Artist | None = None) -> Album:
        return Album(
            id=self.id,
            name=self.name,
            artist_id=self.artist_id,
            genre=self.genre,
            release_year=self.year,
            track_count=self.track_count,
            cover=self.cover,
            artist=artist,
        )


class SongRow(SQLModel, table=True):
    """Song keyed by the catalog trackId."""

    __tablename__ = "song"

    id: int = Field(primary_key=True, sa_column_kwargs={"autoincrement": False})
    title: str
    length: int | None = None
    preview_url: str | None = None
    album_id: int = Field(foreign_key="album.id", index=True)

    @classmethod
    def from_domain(cls, song: Song) -> "SongRow":
        return cls(
            id=song.id,
            title=song.title,
            length=song.length_millis,
            preview_url=song.preview_url,
            album_id=song.album_id,
        )

    def to_domain(self, album: Album | None = None) -> Song:
        return Song(
            id=self.id,
            title=self.title,
            album_id=self.album_id,
            length_millis=self.length,
            preview_url=self.preview_url,
            album=album,
        )


class PlaylistRow(SQLModel, table=True):
    """User playlist with a generated id."""

    __tablename__ = "playlist"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True)

    def to_domain(self, song_ids: frozenset[int] = frozenset()) -> Playlist:
        return Playlist(id=self.id, name=self.name, song_ids=song_ids)


class PlaylistSongLink(SQLModel, table=True):
    """Bridge row for playlist membership, unique on the pair."""

    __tablename__ = "playlist_song"

    playlist_id: int = Field(foreign_key="playlist.id", primary_key=True)
    song_id: int = Field(foreign_key="song.id", primary_key=True, index=True)
