"""ORM model for registered users."""

from sqlalchemy import Column, Integer, String

from soundshare.models.base import Base


class User(Base):
    """
    User account for JWT authentication.

    username uniqueness is enforced by the table's unique index, not by a
    pre-check in application code.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
