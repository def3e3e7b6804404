"""ORM models for user playlists and their song entries."""

from sqlalchemy import Column, ForeignKey, Integer, String

from soundshare.models.base import Base


class Playlist(Base):
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)


class PlaylistSong(Base):
    """
    Join row between a playlist and a song.

    No position column: entries have no playback order.
    """

    __tablename__ = "playlist_songs"

    playlist_id = Column(
        Integer,
        ForeignKey("playlists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    song_id = Column(
        Integer,
        ForeignKey("songs.id", ondelete="CASCADE"),
        primary_key=True,
    )
