"""
Error taxonomy shared by services and routers.

Every exception carries the HTTP status it maps to and a human-readable
message; the app registers a single handler for AccountError.
"""

from __future__ import annotations


class AccountError(Exception):
    """Base class for every failure surfaced to API callers."""

    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AccountError):
    status_code = 400
    default_message = "User validation failed"


class DuplicateEmailError(AccountError):
    status_code = 400
    default_message = "Email address is already registered. Please use a different email."


class UserNotFoundError(AccountError):
    status_code = 404
    default_message = "User not found with the provided email address"


class InvalidCredentialsError(AccountError):
    status_code = 401
    default_message = "Invalid email or password"


class NotAuthenticatedError(AccountError):
    status_code = 401
    default_message = "User is not authenticated"


class TokenInvalidError(NotAuthenticatedError):
    default_message = "Token is invalid or expired"


class ImmutableFieldError(AccountError):
    status_code = 400


class EmailImmutableError(ImmutableFieldError):
    default_message = "Email ID cannot be changed"


class CreatedAtImmutableError(ImmutableFieldError):
    default_message = "Created Date cannot be changed"


class StoreError(AccountError):
    """Raised when the credential store fails; the message never leaks driver details."""

    status_code = 500
    default_message = "Storage backend unavailable"
