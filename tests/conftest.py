# tests/conftest.py

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from casetasks.config import Settings
from casetasks.database import Database
from casetasks.main import create_app
from casetasks.services.credentials import CredentialService

from .helpers import bearer, register


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    # low bcrypt cost keeps the suite fast
    return Settings(
        jwt_secret="test-secret",
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        bcrypt_rounds=4,
        environment="test",
    )


@pytest.fixture()
def database(settings: Settings):
    database = Database.from_settings(settings)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def db(database: Database):
    session = database.SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def credentials(settings: Settings) -> CredentialService:
    return CredentialService.from_settings(settings)


@pytest.fixture()
def app(settings: Settings, database: Database):
    return create_app(settings=settings, database=database)


@pytest.fixture()
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture()
def token(client: TestClient) -> str:
    token, _ = register(client)
    return token


@pytest.fixture()
def auth_headers(token: str) -> dict:
    return bearer(token)
