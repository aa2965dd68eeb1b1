import os
import pytest


@pytest.fixture(scope="session", autouse=True)
def set_test_env(tmp_path_factory):
    db_file = tmp_path_factory.mktemp("data") / "test.db"
    os.environ["DB_PATH"] = str(db_file)
    os.environ["APP_PASSWORD"] = "testpass"
    os.environ["SECRET_KEY"] = "test-secret-key-for-testing"


@pytest.fixture(scope="session")
def client(set_test_env):
    from fastapi.testclient import TestClient
    from app.main import app
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


@pytest.fixture(scope="session")
def authed_client(client):
    client.post("/login", data={"password": "testpass"})
    return client


@pytest.fixture
def api(authed_client):
    """Logged-in client over empty tables."""
    conn = authed_client.app.state.db.connect()
    try:
        conn.executescript("DELETE FROM bookings; DELETE FROM inventory; DELETE FROM logs;")
        conn.commit()
    finally:
        conn.close()
    return authed_client


@pytest.fixture
def db(tmp_path):
    from boat_log.db.database import Database
    database = Database(tmp_path / "boat_log.db")
    database.init_schema()
    return database
