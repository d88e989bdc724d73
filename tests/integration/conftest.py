"""Integration test fixtures (service checks and prerequisites).

Provides fixtures for checking if external services are available.
Integration tests are skipped if required services are not running.
"""

import pytest
from redis.asyncio import Redis as AsyncRedis

from casting_director.persistence.redis_client import (
    close_async_redis_client,
    create_async_redis_client,
)

REDIS_URL = "redis://localhost:6379/15"


@pytest.fixture
async def redis_client(test_settings):
    """Real async Redis client on a scratch database, flushed around each test.
    
    Skips tests if Redis is not reachable.
    """
    test_settings.REDIS_URL = REDIS_URL
    client: AsyncRedis = create_async_redis_client(test_settings)
    try:
        await client.ping()
    except Exception as e:
        await close_async_redis_client(client)
        pytest.skip(f"Redis not available: {e}")
    
    await client.flushdb()
    yield client
    await client.flushdb()
    await close_async_redis_client(client)
