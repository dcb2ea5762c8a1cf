# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Provides a fresh in-memory place store per test
# - Provides users and an HTTP client wired to that store
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("PLACE_STORE_BACKEND", "memory")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-pytest-only")
os.environ.setdefault("LOGIN_PATH", "/users/sign_in")

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.auth.models import AuthUser
from app.dependencies import get_place_store
from app.main import app
from core.models.place import PlaceFields
from core.services.place_service import PlaceService
from lib.place_store import InMemoryPlaceStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def cafe_lingo():
    """The place every scenario starts from."""
    return PlaceFields(
        name="Cafe Lingo",
        description="Where the cool kids are.",
        address="68 Jay Street, Suite 720, Brooklyn 11201",
    )


@pytest.fixture
def cafe_exchange():
    """Replacement values used by update scenarios."""
    return PlaceFields(
        name="Cafe Exchange",
        description="Free coffee every Friday from 1pm to 2pm.",
        address="16 State St, New York, NY",
    )


@pytest.fixture
def blank_fields():
    """Fields that fail validation."""
    return PlaceFields(name="", description="", address="")


@pytest.fixture
def alice():
    return AuthUser(id=uuid4(), email="alice@example.com")


@pytest.fixture
def bob():
    return AuthUser(id=uuid4(), email="bob@example.com")


@pytest.fixture
def store():
    """A fresh, empty in-memory place store."""
    return InMemoryPlaceStore()


@pytest.fixture
def service(store):
    return PlaceService(store)


@pytest.fixture
def client(store):
    """
    HTTP client whose requests all share the `store` fixture.

    Redirects are not followed so tests can assert on 302 responses.
    """
    app.dependency_overrides[get_place_store] = lambda: store
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
