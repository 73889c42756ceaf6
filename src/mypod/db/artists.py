"""Artist repository."""

import logging

from sqlmodel import Session, col, select

from mypod.db.base import Repository, ref_id, required_ref_id
from mypod.db.models import AlbumRow, ArtistRow, PlaylistSongLink, SongRow
from mypod.exceptions import NotFoundError
from mypod.models import Artist

logger = logging.getLogger(__name__)


class ArtistRepository(Repository):
    """Repository for artist database operations."""

    row_type = ArtistRow
    label = "artist"

    def save(self, artist: Artist) -> None:
        """Insert a new artist.

        Raises:
            ConstraintError: If an artist with this id already exists.
        """
        self._insert(ArtistRow.from_domain(artist))

    def get(self, id: int | None) -> Artist | None:
        """Get artist by ID."""
        if id is None:
            return None
        with Session(self._engine) as session:
            row = session.get(ArtistRow, id)
            return row.to_domain() if row else None

    def find_all(self) -> list[Artist]:
        """List all artists ordered by name."""
        with Session(self._engine) as session:
            stmt = select(ArtistRow).order_by(col(ArtistRow.name), col(ArtistRow.id))
            return [row.to_domain() for row in session.exec(stmt).all()]

    def delete(self, artist: Artist | int) -> None:
        """Delete an artist together with everything it owns.

        Removes, in order, the playlist memberships of the artist's songs,
        the songs, the albums and finally the artist, in one transaction.
        Playlists themselves are left in place.

        Raises:
            ValidationError: If no artist is given.
            NotFoundError: If the artist id does not resolve.
        """
        artist_id = required_ref_id(artist, "Artist")
        with Session(self._engine) as session:
            row = session.get(ArtistRow, artist_id) if artist_id is not None else None
            if row is None:
                raise NotFoundError(f"Artist not found with id: {artist_id}")

            albums = session.exec(
                select(AlbumRow).where(AlbumRow.artist_id == artist_id)
            ).all()
            album_ids = [a.id for a in albums]
            songs = session.exec(
                select(SongRow).where(col(SongRow.album_id).in_(album_ids))
            ).all()
            song_ids = [s.id for s in songs]
            links = session.exec(
                select(PlaylistSongLink).where(
                    col(PlaylistSongLink.song_id).in_(song_ids)
                )
            ).all()

            # Children first; no ORM relationships order these for us
            for group in (links, songs, albums):
                for child in group:
                    session.delete(child)
                session.flush()
            session.delete(row)
            session.commit()

        logger.info(
            "Deleted artist %s with %d albums, %d songs, %d playlist entries",
            artist_id,
            len(album_ids),
            len(song_ids),
            len(links),
        )

    def exists(self, artist: Artist | int | None) -> bool:
        """Check existence by entity or id."""
        return self.exists_by_id(ref_id(artist))
