"""Request/response schemas for the song catalog and upload endpoints."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SongOut(BaseModel):
    """Song row as returned by GET /songs."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    artist: str | None = None
    album: str | None = None
    file_url: str
    cover_url: str | None = None
    uploaded_at: datetime | None = None
    uploaded_by: int | None = None


class SongCreate(BaseModel):
    """JSON body for registering already-hosted assets (POST /songs)."""

    title: str | None = Field(default=None, max_length=255)
    artist: str | None = Field(default=None, max_length=255)
    album: str | None = Field(default=None, max_length=255)
    file_url: str | None = Field(
        default=None,
        max_length=2048,
        validation_alias=AliasChoices("file_url", "mp3_url"),
    )
    cover_url: str | None = Field(default=None, max_length=2048)


class UploadResponse(BaseModel):
    """Response after a successful multipart upload."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = "Song uploaded"
    song_url: str = Field(..., alias="songUrl")
    cover_url: str | None = Field(default=None, alias="coverUrl")
