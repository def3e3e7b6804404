"""Playlist endpoints. All require a Bearer token."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from soundshare.api.deps import get_current_user
from soundshare.core.config import settings
from soundshare.core.database import get_db
from soundshare.schemas.auth import CurrentUser
from soundshare.schemas.playlist import (
    PlaylistCreate,
    PlaylistOut,
    PlaylistSongAdd,
    SuccessResponse,
)
from soundshare.services import playlist_service

router = APIRouter()


@router.get("", response_model=list[PlaylistOut])
def get_playlists(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> list[PlaylistOut]:
    """Playlists owned by the caller."""
    playlists = playlist_service.list_playlists(db, current_user.id)
    return [PlaylistOut.model_validate(p) for p in playlists]


@router.post("", response_model=SuccessResponse)
def post_playlist(
    body: PlaylistCreate,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SuccessResponse:
    playlist_service.create_playlist(db, current_user.id, body.name)
    return SuccessResponse()


@router.post("/{playlist_id}/songs", response_model=SuccessResponse)
def post_playlist_song(
    playlist_id: int,
    body: PlaylistSongAdd,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SuccessResponse:
    playlist_service.add_song(
        db,
        playlist_id,
        body.song_id,
        user_id=current_user.id,
        check_owner=settings.PLAYLIST_OWNERSHIP_CHECK,
    )
    return SuccessResponse()


@router.delete("/{playlist_id}/songs/{song_id}", response_model=SuccessResponse)
def delete_playlist_song(
    playlist_id: int,
    song_id: int,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SuccessResponse:
    """Remove a song from a playlist. Succeeds even if the entry was not there."""
    playlist_service.remove_song(
        db,
        playlist_id,
        song_id,
        user_id=current_user.id,
        check_owner=settings.PLAYLIST_OWNERSHIP_CHECK,
    )
    return SuccessResponse()
