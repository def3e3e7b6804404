"""Auth dependencies: Bearer token extraction and verification."""

from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from soundshare.core.errors import AuthError
from soundshare.core.security import decode_access_token
from soundshare.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)


def _user_from_token(token: str) -> CurrentUser:
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        raise AuthError("Invalid token") from e
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        raise AuthError("Invalid token") from e
    username = payload.get("username")
    return CurrentUser(id=user_id, username=username if isinstance(username, str) else None)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """Dependency: require a valid Bearer JWT and return its identity claims."""
    if credentials is None or not credentials.credentials:
        raise AuthError("No token")
    return _user_from_token(credentials.credentials)


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser | None:
    """Dependency: identity claims if a token was sent, None otherwise. A bad token is still a 401."""
    if credentials is None or not credentials.credentials:
        return None
    return _user_from_token(credentials.credentials)
