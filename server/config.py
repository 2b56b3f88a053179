# server/config.py

import os
from dataclasses import dataclass
from dotenv import load_dotenv
from sqlalchemy.engine import URL


REQUIRED_VARS = ("AUTH_DB_USERNAME", "AUTH_DB_PASSWORD", "AUTH_DB_HOST")

DEFAULT_DB_NAME = "simpleAuthDB"
DEFAULT_DB_DRIVER = "postgresql+psycopg2"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_BCRYPT_ROUNDS = 10


class ConfigError(Exception):
    """Raised when required settings are missing or malformed."""


@dataclass(frozen=True)
class Settings:
    db_username: str
    db_password: str
    db_host: str
    db_name: str = DEFAULT_DB_NAME
    db_driver: str = DEFAULT_DB_DRIVER
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        """
        Builds settings from the process environment (after loading .env).
        Raises ConfigError listing every missing required variable.
        """
        if env is None:
            load_dotenv()
            env = os.environ

        missing = [name for name in REQUIRED_VARS if not env.get(name)]
        if missing:
            raise ConfigError(
                f"Database credentials ({', '.join(missing)}) must be set in the environment or .env file."
            )

        return cls(
            db_username=env["AUTH_DB_USERNAME"],
            db_password=env["AUTH_DB_PASSWORD"],
            db_host=env["AUTH_DB_HOST"],
            db_name=env.get("AUTH_DB_NAME") or DEFAULT_DB_NAME,
            db_driver=env.get("AUTH_DB_DRIVER") or DEFAULT_DB_DRIVER,
            host=env.get("AUTH_HOST") or DEFAULT_HOST,
            port=_int_setting(env, "AUTH_PORT", DEFAULT_PORT),
            bcrypt_rounds=_int_setting(env, "AUTH_BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS),
            log_level=(env.get("AUTH_LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def database_url(self) -> URL:
        host, _, port = self.db_host.partition(":")
        return URL.create(
            self.db_driver,
            username=self.db_username,
            password=self.db_password,
            host=host,
            port=int(port) if port else None,
            database=self.db_name,
        )


def _int_setting(env, name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")
