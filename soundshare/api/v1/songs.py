"""Song catalog endpoints: listing, multipart upload, and direct registration."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.orm import Session

from soundshare.api.deps import get_current_user, get_optional_user
from soundshare.core.config import settings
from soundshare.core.database import get_db
from soundshare.core.errors import AuthError
from soundshare.schemas.auth import CurrentUser
from soundshare.schemas.playlist import SuccessResponse
from soundshare.schemas.song import SongCreate, SongOut, UploadResponse
from soundshare.services.song_service import create_song, list_songs, submit_song
from soundshare.services.storage import StorageBackend, get_storage

router = APIRouter()


@router.get("", response_model=list[SongOut])
def get_songs(db: Annotated[Session, Depends(get_db)]) -> list[SongOut]:
    """Every song, newest first. Not paginated."""
    return [SongOut.model_validate(s) for s in list_songs(db)]


@router.post("", response_model=SuccessResponse)
def post_song(
    body: SongCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SuccessResponse:
    """Register a song whose audio (and cover) are already hosted elsewhere."""
    create_song(
        db,
        title=body.title,
        file_url=body.file_url,
        artist=body.artist,
        album=body.album,
        cover_url=body.cover_url,
        uploaded_by=current_user.id,
    )
    return SuccessResponse()


@router.post("/upload", response_model=UploadResponse)
async def upload_song(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[StorageBackend, Depends(get_storage)],
    current_user: Annotated[CurrentUser | None, Depends(get_optional_user)],
    title: Annotated[str | None, Form()] = None,
    artist: Annotated[str | None, Form()] = None,
    album: Annotated[str | None, Form()] = None,
    song: Annotated[UploadFile | None, File()] = None,
    cover: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """
    Accept a multipart upload.

    - **song**: audio file (required)
    - **cover**: image file (optional)
    - **title** (required), **artist**, **album**: form fields

    Files are stored on the configured backend and the song row is inserted
    with the resulting public URLs.
    """
    if settings.UPLOAD_REQUIRES_AUTH and current_user is None:
        raise AuthError("No token")
    row = await submit_song(
        db,
        storage,
        title=title,
        song_file=song,
        cover_file=cover,
        artist=artist,
        album=album,
        uploaded_by=current_user.id if current_user else None,
        max_bytes=settings.MAX_UPLOAD_BYTES,
    )
    return UploadResponse(song_url=row.file_url, cover_url=row.cover_url)
