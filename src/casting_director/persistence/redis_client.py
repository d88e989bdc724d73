"""
Redis client factory with connection pooling.

The process entry point owns the returned client: it is created in the
application lifespan and closed on shutdown.
"""

import logging

from redis.asyncio import ConnectionPool as AsyncConnectionPool
from redis.asyncio import Redis as AsyncRedis

from casting_director.config import Settings

logger = logging.getLogger(__name__)


def create_async_redis_client(settings: Settings) -> AsyncRedis:
    """
    Build an asynchronous Redis client backed by its own connection pool.
    
    Args:
        settings: Application settings
    
    Returns:
        AsyncRedis client instance
    """
    pool = AsyncConnectionPool.from_url(
        settings.REDIS_URL,
        max_connections=settings.REDIS_MAX_CONNECTIONS,
        decode_responses=True,  # Auto-decode bytes to str
        socket_timeout=5,
        socket_connect_timeout=5,
        retry_on_timeout=True,
    )
    logger.info("Initialized Redis async connection pool")
    return AsyncRedis(connection_pool=pool)


async def close_async_redis_client(client: AsyncRedis) -> None:
    """Close the client and disconnect its pool (cleanup on shutdown)."""
    await client.aclose()
    await client.connection_pool.disconnect()
    logger.info("Closed Redis async connection pool")
