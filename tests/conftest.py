"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from api.dependencies import reset_container
from modules.auth.models import Account, AccountRole, User
from modules.auth.tokens import TokenIssuer, TokenSigner
from shared.config import get_settings
from shared.database import reset_client_cache

# Test JWT settings (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-32b"
TEST_ISSUER = "http://mygram-account"
TEST_AUDIENCE = "http://mygram"


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container and cached settings around each test."""
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()
    yield
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def signer() -> TokenSigner:
    """A signer keyed with the test secret."""
    return TokenSigner(TEST_JWT_SECRET, TEST_ISSUER, TEST_AUDIENCE)


@pytest.fixture
def issuer(signer: TokenSigner) -> TokenIssuer:
    """An issuer with default lifetimes."""
    return TokenIssuer(signer)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_db() -> MagicMock:
    """A Supabase client whose query chains are MagicMocks."""
    return MagicMock()


@pytest.fixture
def sample_user() -> User:
    return User(
        id=7,
        username="bob",
        email="bob@example.com",
        password="$2b$04$placeholderplaceholderplaceholderplaceholderplac",
        age=30,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        updated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_account() -> Account:
    return Account(
        id="3f1c2b9e-8c2a-4a51-9d0e-6b7a1f2c3d4e",
        username="admin",
        password="$2b$04$placeholderplaceholderplaceholderplaceholderplac",
        role=AccountRole.ADMIN,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
