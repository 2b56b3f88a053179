# server/core/service.py

import logging
from fastapi.concurrency import run_in_threadpool
from server.core.errors import (
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    ValidationError,
)
from server.core.security import PasswordHasher
from server.database import CredentialStore, DuplicateUserError, StoreError


logger = logging.getLogger(__name__)


def validate_credentials(username, password) -> tuple[str, str]:
    """
    Presence check only. Returns the trimmed username and the password as given.
    """
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError()
    username = username.strip()
    if not username or not password:
        raise ValidationError()
    return username, password


class AuthService:
    """
    Register and login against an injected CredentialStore.
    Store and bcrypt calls block, so they run in the threadpool.
    """

    def __init__(self, store: CredentialStore, hasher: PasswordHasher | None = None):
        self.store = store
        self.hasher = hasher or PasswordHasher()

    async def register(self, username, password) -> str:
        username, password = validate_credentials(username, password)

        try:
            existing = await run_in_threadpool(self.store.find_user, username)
            if existing is not None:
                raise ConflictError()

            hashed = await run_in_threadpool(self.hasher.hash, password)
            await run_in_threadpool(self.store.create_user, username, hashed)
        except DuplicateUserError:
            # Lost a concurrent race on the unique constraint
            raise ConflictError()
        except (StoreError, ValueError):
            logger.exception("Registration error")
            raise InternalError("An internal error occurred during registration.")

        logger.info("New user registered: %s", username)
        return username

    async def login(self, username, password) -> str:
        username, password = validate_credentials(username, password)

        try:
            user = await run_in_threadpool(self.store.find_user, username)
            if user is None:
                raise InvalidCredentialsError()
            is_match = await run_in_threadpool(self.hasher.verify, password, user.hashed_password)
        except (StoreError, ValueError):
            logger.exception("Login error")
            raise InternalError("An internal error occurred during login.")

        if not is_match:
            raise InvalidCredentialsError()

        logger.info("User logged in: %s", user.username)
        return user.username
