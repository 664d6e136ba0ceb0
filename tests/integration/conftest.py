"""Integration test fixtures (service checks and prerequisites).

The router itself is always mocked with respx. Redis-backed tests are
skipped if Redis is not running.
"""

import pytest
from redis import Redis
from redis.asyncio import Redis as AsyncRedis

REDIS_TEST_URL = "redis://localhost:6379/15"


@pytest.fixture(scope="session")
def check_redis():
    """Check if Redis is available at localhost:6379.

    Skips tests if Redis is not reachable.
    """
    try:
        client = Redis.from_url(REDIS_TEST_URL)
        client.ping()
        client.close()
    except Exception as e:
        pytest.skip(f"Redis not available: {e}")


@pytest.fixture
async def real_async_redis(check_redis):
    """Async Redis client on a scratch database, flushed after the test."""
    client = AsyncRedis.from_url(REDIS_TEST_URL, decode_responses=True)
    yield client
    await client.flushdb()
    await client.aclose()
