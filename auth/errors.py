"""
Error taxonomy for the account flows.

Every ``AuthError`` carries the HTTP status and the public message the
routes send back; anything more specific stays in the logs.
"""

from __future__ import annotations


class AuthError(Exception):
    status_code: int = 500
    message: str = "request failed"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateUsernameError(AuthError):
    status_code = 409
    message = "username already taken"


class WeakPasswordError(AuthError):
    status_code = 400
    message = (
        "password must be at least 6 characters long and contain "
        "at least one letter and one number"
    )


class MissingAccountFieldError(AuthError):
    status_code = 400
    message = "username and email are required"


class InvalidCredentialsError(AuthError):
    status_code = 400
    message = "invalid username or password"


class InternalFailureError(AuthError):
    status_code = 500


class PasswordHashError(Exception):
    """Stored password hash could not be parsed."""


class TokenConfigError(Exception):
    """Token signing is not configured (missing secret)."""


class InvalidTokenError(Exception):
    """Token failed signature, structure or expiry checks."""
