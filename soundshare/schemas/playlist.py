"""Request/response schemas for playlist endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class PlaylistCreate(BaseModel):
    name: str | None = Field(default=None, max_length=255)


class PlaylistOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str


class PlaylistSongAdd(BaseModel):
    song_id: int | None = None


class SuccessResponse(BaseModel):
    success: bool = True
