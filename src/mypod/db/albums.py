"""Album repository."""

import logging

from sqlmodel import Session, col, select

from mypod.db.base import Repository, ref_id, required_ref_id
from mypod.db.models import AlbumRow, ArtistRow, genre_key
from mypod.exceptions import NotFoundError
from mypod.models import Album, Artist

logger = logging.getLogger(__name__)


def _album_query():
    """Select albums joined with their owning artist."""
    return (
        select(AlbumRow, ArtistRow)
        .join(ArtistRow, col(AlbumRow.artist_id) == col(ArtistRow.id))
        .order_by(col(ArtistRow.name), col(AlbumRow.year), col(AlbumRow.id))
    )


def _to_album(album: AlbumRow, artist: ArtistRow) -> Album:
    return album.to_domain(artist.to_domain())


class AlbumRepository(Repository):
    """Repository for album database operations.

    Query results carry the resolved owning artist.
    """

    row_type = AlbumRow
    label = "album"

    def save(self, album: Album) -> None:
        """Insert a new album.

        Raises:
            ConstraintError: If an album with this id already exists or its
                artist is not stored.
        """
        self._insert(AlbumRow.from_domain(album))

    def get(self, id: int | None) -> Album | None:
        """Get album by ID."""
        if id is None:
            return None
        with Session(self._engine) as session:
            row = session.exec(_album_query().where(AlbumRow.id == id)).first()
            return _to_album(*row) if row else None

    def find_all(self) -> list[Album]:
        """List all albums."""
        with Session(self._engine) as session:
            return [_to_album(*row) for row in session.exec(_album_query()).all()]

    def find_by_artist(self, artist: Artist | int | None) -> list[Album]:
        """List albums owned by an artist. No artist gives an empty list."""
        artist_id = ref_id(artist)
        if artist_id is None:
            return []
        with Session(self._engine) as session:
            stmt = _album_query().where(AlbumRow.artist_id == artist_id)
            return [_to_album(*row) for row in session.exec(stmt).all()]

    def find_by_genre(self, genre: str | None) -> list[Album]:
        """List albums of a genre (case-insensitive exact match, Unicode-aware).

        A missing or blank genre gives an empty list.
        """
        key = genre_key(genre)
        if key is None:
            return []
        with Session(self._engine) as session:
            stmt = _album_query().where(AlbumRow.genre_key == key)
            return [_to_album(*row) for row in session.exec(stmt).all()]

    def set_cover(self, album: Album | int, cover: bytes | None) -> None:
        """Replace an album's cover art.

        Raises:
            ValidationError: If no album is given.
            NotFoundError: If the album id does not resolve.
        """
        album_id = required_ref_id(album, "Album")
        with Session(self._engine) as session:
            row = session.get(AlbumRow, album_id) if album_id is not None else None
            if row is None:
                raise NotFoundError(f"Album not found with id: {album_id}")
            row.cover = cover
            session.commit()
        logger.debug("Updated cover for album %s", album_id)

    def exists(self, album: Album | int | None) -> bool:
        """Check existence by entity or id."""
        return self.exists_by_id(ref_id(album))
