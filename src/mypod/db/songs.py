"""Song repository."""

from sqlmodel import Session, col, select

from mypod.db.base import Repository, ref_id
from mypod.db.models import AlbumRow, ArtistRow, SongRow, genre_key
from mypod.models import Album, Artist, Song


def _song_query():
    """Select songs joined with their album and the album's artist."""
    return (
        select(SongRow, AlbumRow, ArtistRow)
        .join(AlbumRow, col(SongRow.album_id) == col(AlbumRow.id))
        .join(ArtistRow, col(AlbumRow.artist_id) == col(ArtistRow.id))
        .order_by(col(ArtistRow.name), col(AlbumRow.id), col(SongRow.id))
    )


def to_song(song: SongRow, album: AlbumRow, artist: ArtistRow) -> Song:
    """Build a Song with its album and artist resolved."""
    return song.to_domain(album.to_domain(artist.to_domain()))


class SongRepository(Repository):
    """Repository for song database operations.

    Every query resolves the full ownership chain (Song.album and
    Song.album.artist) in a single round trip.
    """

    row_type = SongRow
    label = "song"

    def save(self, song: Song) -> None:
        """Insert a new song.

        Raises:
            ConstraintError: If a song with this id already exists or its
                album is not stored.
        """
        self._insert(SongRow.from_domain(song))

    def get(self, id: int | None) -> Song | None:
        """Get song by ID."""
        if id is None:
            return None
        with Session(self._engine) as session:
            row = session.exec(_song_query().where(SongRow.id == id)).first()
            return to_song(*row) if row else None

    def find_all(self) -> list[Song]:
        """List all songs."""
        with Session(self._engine) as session:
            return [to_song(*row) for row in session.exec(_song_query()).all()]

    def find_by_artist(self, artist: Artist | int | None) -> list[Song]:
        """List songs on any album of an artist."""
        artist_id = ref_id(artist)
        if artist_id is None:
            return []
        with Session(self._engine) as session:
            stmt = _song_query().where(ArtistRow.id == artist_id)
            return [to_song(*row) for row in session.exec(stmt).all()]

    def find_by_album(self, album: Album | int | None) -> list[Song]:
        """List songs of an album."""
        album_id = ref_id(album)
        if album_id is None:
            return []
        with Session(self._engine) as session:
            stmt = _song_query().where(SongRow.album_id == album_id)
            return [to_song(*row) for row in session.exec(stmt).all()]

    def find_by_genre(self, genre: str | None) -> list[Song]:
        """List songs whose album has the genre (case-insensitive, Unicode-aware)."""
        key = genre_key(genre)
        if key is None:
            return []
        with Session(self._engine) as session:
            stmt = _song_query().where(AlbumRow.genre_key == key)
            return [to_song(*row) for row in session.exec(stmt).all()]

    def exists(self, song: Song | int | None) -> bool:
        """Check existence by entity or id."""
        return self.exists_by_id(ref_id(song))
