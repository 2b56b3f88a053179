import pytest

from server import main as server_main
from server.database import StoreError


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.setattr("server.config.load_dotenv", lambda: None)
    for name in ("AUTH_DB_USERNAME", "AUTH_DB_PASSWORD", "AUTH_DB_HOST"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_refuses_to_start_without_credentials(clean_env):
    served = []
    clean_env.setattr(server_main.uvicorn, "run", lambda *a, **kw: served.append(a))

    with pytest.raises(SystemExit) as exit_info:
        server_main.main()

    assert exit_info.value.code == 1
    assert served == []


def test_refuses_to_start_when_database_unreachable(clean_env):
    clean_env.setenv("AUTH_DB_USERNAME", "asif")
    clean_env.setenv("AUTH_DB_PASSWORD", "secret")
    clean_env.setenv("AUTH_DB_HOST", "localhost:5432")

    def fail_connect(self):
        raise StoreError("Could not connect to the database: refused")

    served = []
    clean_env.setattr(server_main.CredentialStore, "connect", fail_connect)
    clean_env.setattr(server_main.uvicorn, "run", lambda *a, **kw: served.append(a))

    with pytest.raises(SystemExit) as exit_info:
        server_main.main()

    assert exit_info.value.code == 1
    assert served == []


def test_startup_errors_logged_under_server_tree(clean_env, caplog):
    assert server_main.logger.name == "server.main"

    with caplog.at_level("CRITICAL", logger="server"):
        with pytest.raises(SystemExit):
            server_main.main()

    assert [r.name for r in caplog.records if r.levelname == "CRITICAL"] == ["server.main"]
