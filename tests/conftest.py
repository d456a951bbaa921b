"""Shared test fixtures.

Loads .env / .env.test so integration tests can find MONGODB_URI.
Unit tests never need a database.
"""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from authstore.domain.user.core.entities.user import User
from authstore.infrastructure.user.in_memory_session_repository import (
    InMemorySessionRepository,
)
from authstore.infrastructure.user.in_memory_user_repository import (
    InMemoryUserRepository,
)

# Load .env first (default environment variables)
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Load .env.test for integration tests (overrides .env values)
env_test_path = Path(__file__).parent.parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Fresh in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def session_repository() -> InMemorySessionRepository:
    """Fresh in-memory session repository."""
    return InMemorySessionRepository()


@pytest.fixture
def sample_user() -> User:
    """The account used throughout the store scenarios."""
    return User.create("foo@bar.com", "Foo Bar", "h", preferences={})
