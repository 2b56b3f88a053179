# server/main.py

import logging
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from server.api import auth
from server.config import ConfigError, Settings
from server.core.errors import AuthError, InternalError, ValidationError
from server.core.security import PasswordHasher
from server.core.service import AuthService
from server.database import CredentialStore, StoreError
from server.logger import setup_logging


# Fixed name so "python -m server.main" still logs under the "server" tree
logger = logging.getLogger("server.main")


def create_app(settings: Settings | None = None, store: CredentialStore | None = None,
               hasher: PasswordHasher | None = None) -> FastAPI:
    """
    Builds the API around an explicitly owned CredentialStore.
    The store is connected on startup and closed on shutdown.
    """
    if store is None:
        settings = settings or Settings.from_env()
        store = CredentialStore(settings.database_url)
    if hasher is None:
        hasher = PasswordHasher(settings.bcrypt_rounds) if settings else PasswordHasher()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.connect()
        try:
            yield
        finally:
            store.close()

    app = FastAPI(lifespan=lifespan)
    app.state.store = store
    app.state.auth_service = AuthService(store, hasher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthError, handle_auth_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.include_router(auth.router)
    return app


async def handle_auth_error(request: Request, exc: AuthError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    error = ValidationError()
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    error = InternalError()
    return JSONResponse(status_code=error.status_code, content={"message": error.message})


def main():
    """Entry point: refuses to serve if configuration or the database is unusable."""
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        setup_logging()
        logger.critical("FATAL ERROR: %s", e)
        sys.exit(1)

    setup_logging(settings.log_level)
    store = CredentialStore(settings.database_url)
    try:
        store.connect()
    except StoreError as e:
        logger.critical("FATAL ERROR: %s", e)
        sys.exit(1)

    app = create_app(settings, store)
    logger.info("Server is running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
