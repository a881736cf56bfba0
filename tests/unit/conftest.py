"""
Unit test configuration and fixtures.

Unit tests validate isolated components without external dependencies.
These tests should be fast and not require services to be running.
"""

import pytest
from unittest.mock import AsyncMock


# ============================================================================
# Mock Fixtures
# ============================================================================

@pytest.fixture
def mock_user_store():
    """Mock user store for failure-propagation tests."""
    store = AsyncMock()
    store.find_by_id = AsyncMock(return_value=None)
    store.find_many = AsyncMock(return_value=[])
    store.save = AsyncMock()
    return store


@pytest.fixture
def mock_course_store():
    """Mock course store for failure-propagation tests."""
    store = AsyncMock()
    store.find_by_id = AsyncMock(return_value=None)
    store.find_many = AsyncMock(return_value=[])
    store.save = AsyncMock()
    return store
