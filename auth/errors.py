"""
Auth failure taxonomy. Each error maps to one HTTP status and a short,
client-safe message.
"""

from __future__ import annotations

from fastapi import status


class AuthError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request body"


class Conflict(AuthError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "This email is already registered"


class InvalidCredentials(AuthError):
    # same text for unknown email and wrong password
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Your email or password is incorrect. Please try again"


class InternalError(AuthError):
    pass
