"""ORM model for the shared song catalog."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from soundshare.models.base import Base


class Song(Base):
    """Uploaded song metadata plus public URLs of the stored audio and cover assets."""

    __tablename__ = "songs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    artist = Column(String(255), nullable=True)
    album = Column(String(255), nullable=True)
    file_url = Column(String(2048), nullable=False)
    cover_url = Column(String(2048), nullable=True)
    uploaded_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    uploaded_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
