"""Pydantic request/response schemas."""

from soundshare.schemas.auth import (
    CredentialsRequest,
    CurrentUser,
    MessageResponse,
    TokenResponse,
)
from soundshare.schemas.health import ReadinessResponse
from soundshare.schemas.playlist import (
    PlaylistCreate,
    PlaylistOut,
    PlaylistSongAdd,
    SuccessResponse,
)
from soundshare.schemas.song import SongCreate, SongOut, UploadResponse

__all__ = [
    "CredentialsRequest",
    "CurrentUser",
    "MessageResponse",
    "PlaylistCreate",
    "PlaylistOut",
    "PlaylistSongAdd",
    "ReadinessResponse",
    "SongCreate",
    "SongOut",
    "SuccessResponse",
    "TokenResponse",
    "UploadResponse",
]
