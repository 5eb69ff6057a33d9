"""
NoteAPI Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (fresh store, allow-list, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── note_store: Empty NoteStore
    ├── admin_directory: StaticAdminDirectory with ADMIN_TOKENS
    ├── admin_headers: Authorization header of an allowed admin
    └── test_client: HTTPX AsyncClient bound to a fresh app instance
"""

import os

# Override settings for testing BEFORE any noteapi imports
os.environ["ADMIN_TOKENS"] = "admin-token,u1,u2"
os.environ["ADMIN_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from noteapi.main import create_app
from noteapi.services.admin_directory import StaticAdminDirectory
from noteapi.services.note_store import NoteStore

ADMIN_TOKENS = ["admin-token", "u1", "u2"]


@pytest.fixture
def note_store():
    """A fresh, empty store per test."""
    return NoteStore()


@pytest.fixture
def admin_directory():
    """Allow-list containing ADMIN_TOKENS."""
    return StaticAdminDirectory(ADMIN_TOKENS)


@pytest.fixture
def admin_headers():
    return {"authorization": "admin-token"}


@pytest_asyncio.fixture
async def test_client(note_store, admin_directory):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient talking to an app built around the
             `note_store` and `admin_directory` fixtures.
    How:     ASGITransport routes requests directly to the app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(note_store=note_store, admin_directory=admin_directory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
