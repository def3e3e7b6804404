"""Domain errors. Each carries the HTTP status it maps to at the handler boundary."""


class SoundshareError(Exception):
    """Base class for errors that are returned to the client as {"error": message}."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SoundshareError):
    """Required input missing or invalid."""

    status_code = 400


class ConflictError(SoundshareError):
    """A unique constraint rejected the write (duplicate username, duplicate playlist entry)."""

    status_code = 400


class AuthError(SoundshareError):
    """Missing or invalid token, or bad credentials."""

    status_code = 401


class NotFoundError(SoundshareError):
    status_code = 404


class StorageError(SoundshareError):
    """The storage backend failed to write or delete a file."""

    status_code = 500


class InternalError(SoundshareError):
    """Store failure that is not a constraint violation."""

    status_code = 500
