"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from database import Database
from main import create_app
from user_repository import UserRepository


@pytest.fixture
def database():
    """In-memory SQLite shared by every connection of the engine."""
    database = Database("sqlite://", poolclass=StaticPool)
    yield database
    database.dispose()


@pytest.fixture
def repository(database: Database) -> UserRepository:
    database.create_db_and_tables()
    return UserRepository(database.engine)


@pytest.fixture
def client(database: Database):
    """Test client with the startup check and table creation already run."""
    with TestClient(create_app(database)) as client:
        yield client
