"""Registration and login against the users table."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from soundshare.core.database import is_unique_violation
from soundshare.core.errors import AuthError, ConflictError, InternalError, ValidationError
from soundshare.core.security import create_access_token, hash_password, verify_password
from soundshare.models import User

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


@lru_cache
def _dummy_hash() -> str:
    """Hash at the configured cost, checked against when the username is unknown."""
    return hash_password("soundshare-unknown-user")


def _require_credentials(username: str | None, password: str | None) -> tuple[str, str]:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationError("username and password are required")
    return username, password


def register_user(db: Session, username: str | None, password: str | None) -> User:
    """
    Insert a new user with a bcrypt hash of the password.

    Duplicate usernames are detected from the unique index violation on
    insert; any other store failure is an InternalError.
    """
    username, password = _require_credentials(username, password)
    user = User(username=username, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            raise ConflictError("Username already exists") from e
        logger.exception("Registration insert failed for username=%s", username)
        raise InternalError("Registration failed") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Registration insert failed for username=%s", username)
        raise InternalError("Registration failed") from e
    logger.info("Registered user id=%s username=%s", user.id, username)
    return user


def authenticate_user(db: Session, username: str | None, password: str | None) -> str:
    """
    Check credentials and return a signed access token.

    Unknown username and wrong password raise the same AuthError.
    """
    if not (username or "").strip() or not password:
        raise AuthError(INVALID_CREDENTIALS)
    username = username.strip()
    user = db.query(User).filter(User.username == username).first()
    if user is None:
        # Unknown users still pay one bcrypt check at the configured cost.
        verify_password(password, _dummy_hash())
        logger.info("Rejected login for username=%s", username)
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info("Rejected login for username=%s", username)
        raise AuthError(INVALID_CREDENTIALS)
    logger.info("Login succeeded for user id=%s", user.id)
    return create_access_token(user_id=user.id, username=user.username)
