"""Playlists owned by a user and the songs in them."""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from soundshare.core.database import is_unique_violation
from soundshare.core.errors import ConflictError, InternalError, NotFoundError, ValidationError
from soundshare.models import Playlist, PlaylistSong, Song

logger = logging.getLogger(__name__)


def list_playlists(db: Session, user_id: int) -> list[Playlist]:
    return (
        db.query(Playlist)
        .filter(Playlist.user_id == user_id)
        .order_by(Playlist.id)
        .all()
    )


def _commit(db: Session, what: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            raise ConflictError(f"{what} already exists") from e
        logger.exception("%s write failed", what)
        raise InternalError(f"Could not save {what.lower()}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s write failed", what)
        raise InternalError(f"Could not save {what.lower()}") from e


def create_playlist(db: Session, user_id: int, name: str | None) -> Playlist:
    name = (name or "").strip()
    if not name:
        raise ValidationError("name is required")
    playlist = Playlist(user_id=user_id, name=name)
    db.add(playlist)
    _commit(db, "Playlist")
    logger.info("Created playlist id=%s for user id=%s", playlist.id, user_id)
    return playlist


def _check_owner(db: Session, playlist_id: int, user_id: int) -> None:
    """Raise NotFoundError unless the playlist exists and belongs to user_id."""
    playlist = (
        db.query(Playlist)
        .filter(Playlist.id == playlist_id, Playlist.user_id == user_id)
        .first()
    )
    if playlist is None:
        raise NotFoundError("Playlist not found")


def add_song(
    db: Session,
    playlist_id: int,
    song_id: int | None,
    user_id: int,
    check_owner: bool = True,
) -> None:
    if song_id is None:
        raise ValidationError("song_id is required")
    if check_owner:
        _check_owner(db, playlist_id, user_id)
    if db.get(Song, song_id) is None:
        raise NotFoundError("Song not found")
    db.add(PlaylistSong(playlist_id=playlist_id, song_id=song_id))
    _commit(db, "Playlist entry")


def remove_song(
    db: Session,
    playlist_id: int,
    song_id: int,
    user_id: int,
    check_owner: bool = True,
) -> int:
    """Delete the entry if present; returns rows deleted (0 is not an error)."""
    if check_owner:
        _check_owner(db, playlist_id, user_id)
    deleted = (
        db.query(PlaylistSong)
        .filter(
            PlaylistSong.playlist_id == playlist_id,
            PlaylistSong.song_id == song_id,
        )
        .delete(synchronize_session=False)
    )
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Playlist entry delete failed")
        raise InternalError("Could not remove playlist entry") from e
    return deleted
