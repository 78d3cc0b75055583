import pytest
from fastapi.testclient import TestClient

from workforce.db import create_store
from workforce.main import create_app


CREDENTIALS = {
    "admin": {"username": "admin", "password": "admin123", "role": "admin"},
    "hr": {"username": "hr.manager", "password": "hr123", "role": "hr"},
    "john": {"username": "john.doe", "password": "worker123", "role": "worker"},
    "mike": {"username": "mike.smith", "password": "worker123", "role": "worker"},
    "sarah": {"username": "sarah.wilson", "password": "worker123", "role": "worker"},
}


@pytest.fixture
def store():
    return create_store(seed=True)


@pytest.fixture
def app(store):
    return create_app(store=store)


@pytest.fixture
def login(app):
    """Return a logged-in TestClient for one of the demo accounts."""
    clients = []

    def _login(account: str) -> TestClient:
        client = TestClient(app)
        clients.append(client)
        resp = client.post("/api/auth/login", json=CREDENTIALS[account])
        assert resp.status_code == 200, resp.text
        return client

    yield _login
    for client in clients:
        client.close()


@pytest.fixture
def anon(app):
    with TestClient(app) as client:
        yield client


def worker_id_for(store, username: str) -> int:
    user = store.get_user_by_username(username)
    return store.get_worker_by_user_id(user.id).id


def job_id_by_title(store, title: str) -> int:
    return next(j.id for j in store.get_all_jobs() if j.title == title)
