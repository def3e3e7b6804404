"""Song catalog: upload pipeline, direct registration and newest-first listing."""

import asyncio
import logging

from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from soundshare.core.errors import InternalError, StorageError, ValidationError
from soundshare.models import Song
from soundshare.services.storage import StorageBackend, StoredFile, UploadKind

logger = logging.getLogger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _has_file(upload: UploadFile | None) -> bool:
    return upload is not None and bool(getattr(upload, "filename", None))


def list_songs(db: Session) -> list[Song]:
    """All songs, most recently uploaded first (id breaks timestamp ties)."""
    return db.query(Song).order_by(Song.uploaded_at.desc(), Song.id.desc()).all()


def _insert_song(db: Session, song: Song) -> Song:
    db.add(song)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Song insert failed: title=%s", song.title)
        raise InternalError("Could not save song") from e
    db.refresh(song)
    return song


def create_song(
    db: Session,
    title: str | None,
    file_url: str | None,
    artist: str | None = None,
    album: str | None = None,
    cover_url: str | None = None,
    uploaded_by: int | None = None,
) -> Song:
    """Insert a song row for assets that are already hosted."""
    title = _clean(title)
    file_url = _clean(file_url)
    if not title or not file_url:
        raise ValidationError("title and file_url are required")
    song = Song(
        title=title,
        artist=_clean(artist),
        album=_clean(album),
        file_url=file_url,
        cover_url=_clean(cover_url),
        uploaded_by=uploaded_by,
    )
    return _insert_song(db, song)


async def _read_limited(upload: UploadFile, max_bytes: int) -> bytes:
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(
            f"File size must not exceed {max_bytes // (1024 * 1024)} MB."
        )
    return content


async def _discard(storage: StorageBackend, stored: list[StoredFile]) -> None:
    """Compensating delete of files written for a request that did not complete."""
    for item in stored:
        try:
            await storage.delete(item.locator)
            logger.warning("Removed orphaned upload %s", item.locator)
        except StorageError:
            logger.exception("Could not remove orphaned upload %s", item.locator)


async def submit_song(
    db: Session,
    storage: StorageBackend,
    title: str | None,
    song_file: UploadFile | None,
    cover_file: UploadFile | None = None,
    artist: str | None = None,
    album: str | None = None,
    uploaded_by: int | None = None,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> Song:
    """
    Store the song (and optional cover) file, then insert the song row.

    Title and song file are checked before anything is written. If a later
    step fails for any reason, including cancellation, files already written
    for this request are deleted. The insert runs in the threadpool.
    """
    title = _clean(title)
    if not title or not _has_file(song_file):
        raise ValidationError("Song file and title are required")

    uploads: list[tuple[UploadKind, UploadFile]] = [(UploadKind.SONG, song_file)]
    if _has_file(cover_file):
        uploads.append((UploadKind.COVER, cover_file))

    stored: list[StoredFile] = []
    try:
        for kind, upload in uploads:
            content = await _read_limited(upload, max_bytes)
            stored.append(
                await storage.save(kind, upload.filename, content, upload.content_type)
            )
        song = Song(
            title=title,
            artist=_clean(artist),
            album=_clean(album),
            file_url=stored[0].url,
            cover_url=stored[1].url if len(stored) > 1 else None,
            uploaded_by=uploaded_by,
        )
        return await run_in_threadpool(_insert_song, db, song)
    except BaseException:
        if stored:
            # Runs to completion even if the request task is cancelled.
            await asyncio.shield(_discard(storage, stored))
        raise
