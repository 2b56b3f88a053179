from fastapi.testclient import TestClient

from server.core.service import AuthService
from server.database import StoreError
from server.main import create_app


def register(client, username, password):
    return client.post("/register", json={"username": username, "password": password})


def login(client, username, password):
    return client.post("/login", json={"username": username, "password": password})


def test_alice_scenario(client):
    res = register(client, "alice", "secret1")
    assert res.status_code == 201
    assert res.json() == {"message": "User registered successfully!"}

    res = login(client, "alice", "secret1")
    assert res.status_code == 200
    assert res.json() == {"message": "Login successful!", "user": {"username": "alice"}}

    res = login(client, "alice", "wrong")
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials."}

    res = register(client, "alice", "anything")
    assert res.status_code == 409
    assert res.json() == {"message": "User already exists."}


def test_unknown_user_matches_wrong_password(client):
    register(client, "alice", "secret1")

    wrong_password = login(client, "alice", "nope")
    unknown_user = login(client, "nobody", "secret1")

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json()


def test_login_never_returns_hash(client):
    register(client, "alice", "secret1")

    body = login(client, "alice", "secret1").json()

    assert set(body["user"]) == {"username"}
    assert "$2b$" not in str(body)


def test_missing_fields_are_bad_requests(client, store):
    for path in ("/register", "/login"):
        for body in ({}, {"username": "alice"}, {"password": "secret1"},
                     {"username": "", "password": "secret1"}):
            res = client.post(path, json=body)
            assert res.status_code == 400
            assert res.json() == {"message": "Username and password are required."}

    assert store.count_users() == 0


def test_malformed_body_is_bad_request(client):
    res = client.post("/register", content="not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400

    res = client.post("/login", json={"username": ["alice"], "password": "secret1"})
    assert res.status_code == 400


class BrokenStore:
    def connect(self):
        pass

    def close(self):
        pass

    def find_user(self, username):
        raise StoreError("connection reset")

    def create_user(self, username, hashed_password):
        raise StoreError("connection reset")


def test_store_failure_is_500(hasher):
    app = create_app(store=BrokenStore(), hasher=hasher)

    with TestClient(app) as client:
        res = register(client, "alice", "secret1")
        assert res.status_code == 500
        assert res.json() == {"message": "An internal error occurred during registration."}

        res = login(client, "alice", "secret1")
        assert res.status_code == 500
        assert res.json() == {"message": "An internal error occurred during login."}


def test_lifespan_owns_store_connection(tmp_path, hasher):
    from server.database import CredentialStore

    store = CredentialStore(f"sqlite:///{tmp_path / 'users.db'}")
    app = create_app(store=store, hasher=hasher)
    assert isinstance(app.state.auth_service, AuthService)

    with TestClient(app):
        assert store.connected
    assert not store.connected


def test_long_password_over_http(client):
    password = "x" * 5000

    assert register(client, "bob", password).status_code == 201
    res = login(client, "bob", password)
    assert res.status_code == 200
    assert res.json()["user"] == {"username": "bob"}


def test_nul_byte_password_gets_json_error(client):
    res = register(client, "bob", "a\x00b")
    assert res.status_code == 500
    assert res.headers["content-type"].startswith("application/json")
    assert res.json() == {"message": "An internal error occurred during registration."}

    res = login(client, "bob", "a\x00b")
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid credentials."}


class CrashingStore(BrokenStore):
    def find_user(self, username):
        raise RuntimeError("driver exploded")


def test_unexpected_error_gets_json_500(hasher):
    app = create_app(store=CrashingStore(), hasher=hasher)

    with TestClient(app, raise_server_exceptions=False) as client:
        for res in (register(client, "alice", "secret1"), login(client, "alice", "secret1")):
            assert res.status_code == 500
            assert res.headers["content-type"].startswith("application/json")
            assert res.json() == {"message": "An internal error occurred."}
