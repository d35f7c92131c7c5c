import pytest
from fastapi.testclient import TestClient

import server
from database.db_manager import DBManager
from models.job import JobPosting
from database.default_jobs import JOBS_DEFAULT


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "4")


@pytest.fixture
def store(tmp_path):
    db = DBManager(str(tmp_path / "data.json"))
    db.ensure_data_file()
    return db


@pytest.fixture
def jobs():
    return [JobPosting.from_dict(j) for j in JOBS_DEFAULT]


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(server, "db", store)
    return TestClient(server.app)


@pytest.fixture
def auth_headers(client):
    resp = client.post("/api/auth/signup", json={"name": "Ada", "email": "ada@example.com", "password": "s3cret"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['token']}"}
