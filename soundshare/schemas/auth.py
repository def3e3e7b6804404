"""Request/response schemas for auth endpoints."""

from pydantic import AliasChoices, BaseModel, Field


class CredentialsRequest(BaseModel):
    """
    Username and password for register and login.

    Fields are optional at the schema level so that a missing value is
    reported as a 400 by the service instead of a framework 422.
    ``email`` is accepted as an alias of ``username``.
    """

    username: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=AliasChoices("username", "email"),
        description="Username (or email)",
    )
    password: str | None = Field(default=None, max_length=128, description="Password")


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    """JWT returned after successful login; send it back as ``Authorization: Bearer <token>``."""

    token: str = Field(..., description="JWT access token")


class CurrentUser(BaseModel):
    """Identity claims decoded from a verified token."""

    id: int
    username: str | None = None
