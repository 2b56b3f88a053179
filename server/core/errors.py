# server/core/errors.py

from fastapi import status


class AuthError(Exception):
    """Base for errors answered at the request boundary with a status and message."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "An internal error occurred."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username and password are required."


class ConflictError(AuthError):
    status_code = status.HTTP_409_CONFLICT
    message = "User already exists."


class InvalidCredentialsError(AuthError):
    # Shared by unknown user and wrong password so usernames cannot be probed
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid credentials."


class InternalError(AuthError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
