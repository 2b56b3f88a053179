# server/core/security.py

from passlib.context import CryptContext
from server.config import DEFAULT_BCRYPT_ROUNDS


# bcrypt only reads the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


class PasswordHasher:
    """
    bcrypt hashing with a fixed cost factor; the salt is embedded in each hash.
    Secrets are cut to 72 bytes before hashing and verifying, so passwords of
    any length behave the same on both paths.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self.rounds = rounds
        self.pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds
        )

    @staticmethod
    def _secret(password: str) -> bytes:
        return password.encode("utf-8")[:BCRYPT_MAX_BYTES]

    def hash(self, password: str) -> str:
        return self.pwd_context.hash(self._secret(password))

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        return self.pwd_context.verify(self._secret(plain_password), hashed_password)
