# server/database.py

import logging
from sqlalchemy import create_engine, func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from server.models import Base
from server.models.user import User


logger = logging.getLogger(__name__)


class StoreError(Exception):
    """The credential store could not be reached or failed a read/write."""


class DuplicateUserError(StoreError):
    """The unique constraint on username rejected an insert."""


class CredentialStore:
    """
    Client for the users table.
    Construct it with a database URL, call connect() before use and close()
    on shutdown. The underlying engine pools connections and may be shared
    across threads.
    """

    def __init__(self, url, **engine_kwargs):
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine = None
        self._session_factory = None

    @property
    def connected(self) -> bool:
        return self._engine is not None

    def connect(self):
        if self.connected:
            return
        kwargs = dict(self._engine_kwargs)
        if str(self.url).startswith("sqlite"):
            kwargs.setdefault("connect_args", {"check_same_thread": False})

        engine = create_engine(self.url, **kwargs)
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            engine.dispose()
            raise StoreError(f"Could not connect to the database: {e}") from e

        self._engine = engine
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=engine
        )
        logger.info("Connected to database %s", engine.url.render_as_string(hide_password=True))

    def close(self):
        if not self.connected:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database connection closed")

    def _session(self):
        if not self.connected:
            raise StoreError("Credential store is not connected")
        return self._session_factory()

    def find_user(self, username: str) -> User | None:
        try:
            with self._session() as db:
                return db.execute(
                    select(User).where(User.username == username)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(f"User lookup failed: {e}") from e

    def create_user(self, username: str, hashed_password: str) -> User:
        user = User(username=username, hashed_password=hashed_password)
        with self._session() as db:
            try:
                db.add(user)
                db.commit()
            except IntegrityError as e:
                db.rollback()
                # Check constraints also raise IntegrityError
                try:
                    taken = db.execute(
                        select(func.count(User.id)).where(User.username == username)
                    ).scalar_one()
                except SQLAlchemyError as lookup_error:
                    raise StoreError(f"User insert failed: {lookup_error}") from e
                if taken:
                    raise DuplicateUserError(f"User {username!r} already exists") from e
                raise StoreError(f"User insert rejected: {e}") from e
            except SQLAlchemyError as e:
                db.rollback()
                raise StoreError(f"User insert failed: {e}") from e
        return user

    def count_users(self, username: str | None = None) -> int:
        """Inspection helper, used by tests and for operational checks."""
        stmt = select(func.count(User.id))
        if username is not None:
            stmt = stmt.where(User.username == username)
        try:
            with self._session() as db:
                return db.execute(stmt).scalar_one()
        except SQLAlchemyError as e:
            raise StoreError(f"User count failed: {e}") from e
