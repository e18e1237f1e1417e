"""
Pytest configuration and shared fixtures.
"""

import os

# Point the application at a throwaway database before api.config is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["CREATE_TABLES"] = "true"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from api.database import BookDAO
from storage.database import DatabaseManager

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def sample_book_data():
    """Sample book payload for testing."""
    return {
        "isbn": "123432122",
        "amazon_url": "https://amazon.com/taco",
        "author": "Elie",
        "language": "English",
        "pages": 100,
        "publisher": "Nothing publishers",
        "title": "my first book",
        "year": 2008,
    }


@pytest.fixture
def client():
    """Create test client with a fresh in-memory database."""
    from api.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sample_book(client, sample_book_data):
    """Insert the sample book and return it as stored."""
    response = client.post("/books", json=sample_book_data)
    assert response.status_code == 201
    return response.json()["book"]


@pytest_asyncio.fixture
async def db_manager():
    """Connected database manager with tables created."""
    manager = DatabaseManager(TEST_DATABASE_URL)
    await manager.connect()
    await manager.create_tables()
    yield manager
    await manager.disconnect()


@pytest_asyncio.fixture
async def book_dao(db_manager):
    """Data access object bound to the test database."""
    return BookDAO(db_manager.engine)
