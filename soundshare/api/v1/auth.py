"""Registration and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from soundshare.core.database import get_db
from soundshare.schemas.auth import CredentialsRequest, MessageResponse, TokenResponse
from soundshare.services.auth_service import authenticate_user, register_user

router = APIRouter()


@router.post("/register", response_model=MessageResponse)
def register(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    """Create an account. 400 if a field is missing or the username is taken."""
    register_user(db, body.username, body.password)
    return MessageResponse(message="User registered")


@router.post("/login", response_model=TokenResponse)
def login(
    body: CredentialsRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT.
    Include the token in the Authorization header as: Bearer <token>
    """
    return TokenResponse(token=authenticate_user(db, body.username, body.password))
