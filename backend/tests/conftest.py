from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from influenceflow.core.config import Settings
from influenceflow.main import create_app

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway database, with a cheap bcrypt cost for speed"""
    return Settings(
        JWT_SECRET=TEST_SECRET,
        DATABASE_PATH=str(tmp_path / "crm.db"),
        LOCAL_STORAGE_PATH=str(tmp_path / "local.json"),
        BCRYPT_ROUNDS=4,
    )


@pytest.fixture()
def app(settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan, which creates the users table.
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def register(client):
    def _register(email="ana@example.com", password="s3cret-pass", name="Ana"):
        return client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
    return _register
