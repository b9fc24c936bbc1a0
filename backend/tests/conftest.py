"""
MovieNotes Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── sample_movie_payload: A complete POST /movies body
    ├── app: FastAPI app with its lifespan running against a temp SQLite file
    └── test_client: HTTPX AsyncClient bound to `app`
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any movienotes imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="movienotes_test_"), "movies.db"
)
os.environ["LOG_LEVEL"] = "WARNING"  # Reduce noise during tests

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = []
            result = await movie_service.list_movies(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_movie_payload():
    """A POST /movies body with every field set."""
    return {
        "tmdb_id": 550,
        "title": "Fight Club",
        "comment": "Rewatch with subtitles.",
        "user_name": "sam",
        "poster_path": "/pB8BM7pdSp6B6Ih7QZ4DrQ3PmJK.jpg",
        "release_date": "1999-10-15",
    }


@pytest_asyncio.fixture
async def app(tmp_path):
    """
    Provides a FastAPI app whose lifespan has started.

    Each test gets its own database file, so tests never see each other's rows.
    ASGITransport does not run the lifespan, so it is entered here.
    """
    from movienotes.main import create_app

    application = create_app(database_url=f"sqlite+aiosqlite:///{tmp_path / 'movies.db'}")
    async with application.router.lifespan_context(application):
        yield application


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/movies")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
