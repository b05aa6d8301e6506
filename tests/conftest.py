"""
Fixtures compartidas: una base SQLite en memoria por test y un TestClient
con la dependencia get_database sustituida.
"""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from location_tracker.db.session import Database, get_database
from location_tracker.main import app
from location_tracker.schemas.users import UserRequest
from location_tracker.services.locations import LocationService
from location_tracker.services.users import UserService


T0 = datetime(2024, 1, 1, 0, 30, tzinfo=timezone.utc)


@pytest.fixture
def db():
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.engine.dispose()


@pytest.fixture
def users(db):
    return UserService(db)


@pytest.fixture
def service(db):
    return LocationService(db)


@pytest.fixture
def abc_user(users):
    """Usuario 'abc' registrado."""
    return users.create_or_update(UserRequest(email="abc@tracker.io", external_uid="abc"))


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
