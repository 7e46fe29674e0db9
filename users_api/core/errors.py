"""Error kinds raised by services/repositories and rendered by the app."""
from __future__ import annotations


class UserApiError(Exception):
    def __init__(self, message: str, code: str = "invalid", status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class NotFoundError(UserApiError):
    """Raised when an id does not resolve to a user row."""

    def __init__(self, message: str = "There is no user with this id."):
        super().__init__(message, "not_found", 404)


class ValidationError(UserApiError):
    """Raised when a required field is missing or blank."""

    def __init__(self, message: str):
        super().__init__(message, "invalid", 422)


class PersistenceError(UserApiError):
    """Raised when the database rejects a read or a write."""

    def __init__(self, message: str = "Database operation failed."):
        super().__init__(message, "persistence_error", 500)
