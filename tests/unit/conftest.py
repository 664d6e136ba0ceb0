"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without a router or Redis.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from luis_router.clients.discovery_client import DiscoveryClient
from luis_router.clients.identity_client import IdentityClient
from luis_router.models.outcomes import IdentityExchangeResult


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for unit tests."""
    mock = AsyncMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.setex = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_discovery_client():
    """Mock DiscoveryClient; set ``discover.side_effect`` per test."""
    mock = MagicMock(spec=DiscoveryClient)
    mock.discover = AsyncMock()
    return mock


@pytest.fixture
def mock_identity_client():
    """Mock IdentityClient whose exchanges are accepted."""
    mock = MagicMock(spec=IdentityClient)
    mock.exchange = AsyncMock(return_value=IdentityExchangeResult.ACCEPTED)
    return mock
