"""Playlist repository: playlist lifecycle and membership."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from sqlmodel import Session, col, select

from mypod.db.base import Repository, ref_id, required_ref_id
from mypod.db.models import AlbumRow, ArtistRow, PlaylistRow, PlaylistSongLink, SongRow
from mypod.db.songs import to_song
from mypod.exceptions import NotFoundError, ValidationError
from mypod.models import Playlist, Song

logger = logging.getLogger(__name__)

PlaylistRef = Playlist | int
SongRef = Song | int


def _validate_name(name: str | None) -> str:
    if name is None or not name.strip():
        raise ValidationError("Playlist name cannot be empty")
    return name.strip()


class PlaylistRepository(Repository):
    """Repository for playlist database operations.

    Mutations never trust the caller's Playlist or Song objects, which may
    be stale copies held by a long-lived UI. Each one re-resolves the
    playlist and songs by id inside its own session before changing
    anything, and returns the playlist as stored afterwards.
    """

    row_type = PlaylistRow
    label = "playlist"

    # -- Queries ---------------------------------------------------------

    def get(self, id: int | None) -> Playlist | None:
        """Get playlist by ID, with its current members."""
        if id is None:
            return None
        with Session(self._engine) as session:
            row = session.get(PlaylistRow, id)
            if row is None:
                return None
            return row.to_domain(self._member_ids(session, id))

    def find_by_name(self, name: str | None) -> Playlist | None:
        """Get the first playlist with this name (lowest id).

        Surrounding whitespace is ignored, as it is when names are stored.
        """
        if name is None or not name.strip():
            return None
        with Session(self._engine) as session:
            stmt = (
                select(PlaylistRow)
                .where(PlaylistRow.name == name.strip())
                .order_by(col(PlaylistRow.id))
            )
            row = session.exec(stmt).first()
            if row is None:
                return None
            return row.to_domain(self._member_ids(session, row.id))

    def find_all(self) -> list[Playlist]:
        """List all playlists in creation order."""
        with Session(self._engine) as session:
            rows = session.exec(select(PlaylistRow).order_by(col(PlaylistRow.id))).all()
            members: dict[int, set[int]] = defaultdict(set)
            for link in session.exec(select(PlaylistSongLink)).all():
                members[link.playlist_id].add(link.song_id)
            return [row.to_domain(frozenset(members[row.id])) for row in rows]

    def is_song_in_playlist(
        self, playlist: PlaylistRef | None, song: SongRef | None
    ) -> bool:
        """Check membership.

        Unresolvable playlists or songs are simply not members.
        """
        playlist_id, song_id = ref_id(playlist), ref_id(song)
        if playlist_id is None or song_id is None:
            return False
        with Session(self._engine) as session:
            return session.get(PlaylistSongLink, (playlist_id, song_id)) is not None

    def find_songs_in_playlist(self, playlist: PlaylistRef | None) -> list[Song]:
        """List member songs with album and artist resolved.

        An unresolvable playlist gives an empty list.
        """
        playlist_id = ref_id(playlist)
        if playlist_id is None:
            return []
        with Session(self._engine) as session:
            stmt = (
                select(SongRow, AlbumRow, ArtistRow)
                .join(
                    PlaylistSongLink, col(PlaylistSongLink.song_id) == col(SongRow.id)
                )
                .join(AlbumRow, col(SongRow.album_id) == col(AlbumRow.id))
                .join(ArtistRow, col(AlbumRow.artist_id) == col(ArtistRow.id))
                .where(PlaylistSongLink.playlist_id == playlist_id)
                .order_by(col(ArtistRow.name), col(AlbumRow.id), col(SongRow.id))
            )
            return [to_song(*row) for row in session.exec(stmt).all()]

    # -- Lifecycle -------------------------------------------------------

    def create_playlist(self, name: str | None) -> Playlist:
        """Create an empty playlist.

        Raises:
            ValidationError: If name is missing or blank.
        """
        name = _validate_name(name)
        with Session(self._engine) as session:
            row = PlaylistRow(name=name)
            session.add(row)
            session.flush()
            playlist = row.to_domain()
            session.commit()
        logger.info("Created playlist '%s' (id=%s)", playlist.name, playlist.id)
        return playlist

    def rename_playlist(self, playlist: PlaylistRef, new_name: str | None) -> Playlist:
        """Rename the stored playlist.

        Raises:
            ValidationError: If new_name is missing or blank.
            NotFoundError: If the playlist id does not resolve.
        """
        new_name = _validate_name(new_name)
        with Session(self._engine) as session:
            row = self._require_playlist(session, playlist)
            row.name = new_name
            session.flush()
            result = row.to_domain(self._member_ids(session, row.id))
            session.commit()
        logger.info("Renamed playlist %s to '%s'", result.id, new_name)
        return result

    def delete_playlist(self, playlist: PlaylistRef) -> None:
        """Delete a playlist and its memberships. Songs are untouched.

        Raises:
            NotFoundError: If the playlist id does not resolve.
        """
        with Session(self._engine) as session:
            row = self._require_playlist(session, playlist)
            playlist_id = row.id
            links = session.exec(
                select(PlaylistSongLink).where(
                    PlaylistSongLink.playlist_id == playlist_id
                )
            ).all()
            for link in links:
                session.delete(link)
            session.flush()
            session.delete(row)
            session.commit()
        logger.info("Deleted playlist %s (%d memberships)", playlist_id, len(links))

    # -- Membership ------------------------------------------------------

    def add_song(self, playlist: PlaylistRef, song: SongRef) -> Playlist:
        """Add a song to a playlist. Adding a member again is a no-op.

        Raises:
            NotFoundError: If the playlist or song id does not resolve.
        """
        return self.add_songs(playlist, [song])

    def add_songs(self, playlist: PlaylistRef, songs: Iterable[SongRef]) -> Playlist:
        """Add several songs in one transaction.

        Every song is resolved before anything is written, so an unknown
        song leaves the playlist unchanged.

        Raises:
            NotFoundError: If the playlist or any song id does not resolve.
        """
        with Session(self._engine) as session:
            row = self._require_playlist(session, playlist)
            song_rows = [self._require_song(session, s) for s in songs]
            members = set(self._member_ids(session, row.id))
            added = 0
            for song_row in song_rows:
                if song_row.id in members:
                    continue
                session.add(PlaylistSongLink(playlist_id=row.id, song_id=song_row.id))
                members.add(song_row.id)
                added += 1
            session.flush()
            result = row.to_domain(frozenset(members))
            session.commit()
        logger.debug("Added %d songs to playlist %s", added, result.id)
        return result

    def remove_song(self, playlist: PlaylistRef, song: SongRef) -> Playlist:
        """Remove a song from a playlist. Removing a non-member is a no-op.

        Raises:
            NotFoundError: If the playlist or song id does not resolve.
        """
        with Session(self._engine) as session:
            row = self._require_playlist(session, playlist)
            song_id = self._require_song(session, song).id
            link = session.get(PlaylistSongLink, (row.id, song_id))
            if link is not None:
                session.delete(link)
            session.flush()
            result = row.to_domain(self._member_ids(session, row.id))
            session.commit()
        logger.debug("Removed song %s from playlist %s", song_id, result.id)
        return result

    # -- Helpers ---------------------------------------------------------

    def _require_playlist(self, session: Session, playlist: PlaylistRef) -> PlaylistRow:
        playlist_id = required_ref_id(playlist, "Playlist")
        row = session.get(PlaylistRow, playlist_id) if playlist_id is not None else None
        if row is None:
            raise NotFoundError(f"Playlist not found with id: {playlist_id}")
        return row

    def _require_song(self, session: Session, song: SongRef) -> SongRow:
        song_id = required_ref_id(song, "Song")
        row = session.get(SongRow, song_id) if song_id is not None else None
        if row is None:
            raise NotFoundError(f"Song not found with id: {song_id}")
        return row

    def _member_ids(self, session: Session, playlist_id: int) -> frozenset[int]:
        stmt = select(PlaylistSongLink.song_id).where(
            PlaylistSongLink.playlist_id == playlist_id
        )
        return frozenset(session.exec(stmt).all())
