import pytest
from fastapi.testclient import TestClient

from server.core.security import PasswordHasher
from server.core.service import AuthService
from server.database import CredentialStore
from server.main import create_app


@pytest.fixture
def store(tmp_path):
    store = CredentialStore(f"sqlite:///{tmp_path / 'users.db'}")
    store.connect()
    yield store
    store.close()


@pytest.fixture
def hasher():
    # Minimum bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def service(store, hasher):
    return AuthService(store, hasher)


@pytest.fixture
def client(store, hasher):
    app = create_app(store=store, hasher=hasher)
    with TestClient(app) as client:
        yield client
