import asyncio

import pytest
from fastapi.testclient import TestClient

from event_hub_api.app.core.config import Settings
from event_hub_api.app.core.db import Database
from event_hub_api.app.core.security import hash_password
from event_hub_api.app.main import create_app
from event_hub_api.app.services.user_service import UserService

from tests.utils import SECRET


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "event_hub.db"), secret_key=SECRET, db_timeout=2.0)


@pytest.fixture
def db(settings):
    database = Database.from_settings(settings)
    database.init_db()
    return database


@pytest.fixture
def app(settings, db):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(name=None, email=None):
        counter["n"] += 1
        n = counter["n"]
        return asyncio.run(
            UserService(db).insert(
                email or f"user{n}@example.com",
                name or f"User {n}",
                hash_password("secret"),
            )
        )

    return _make_user

