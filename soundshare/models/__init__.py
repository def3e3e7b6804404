"""SQLAlchemy ORM models."""

from soundshare.models.base import Base
from soundshare.models.playlist import Playlist, PlaylistSong
from soundshare.models.song import Song
from soundshare.models.user import User

__all__ = ["Base", "Playlist", "PlaylistSong", "Song", "User"]
