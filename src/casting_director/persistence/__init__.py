"""
Persistence layer.

- document_store.py: DocumentStore protocol, Redis and in-memory stores
- redis_client.py: Async Redis client factory (owned by the app lifespan)
- actor_cache.py: 30-day actor fee cache on top of a document store

Storage Strategy:
- One JSON document per normalized actor name
- cachedAt assigned by the store clock at write time
- Expiry evaluated lazily on read; nothing is swept or deleted
"""

from casting_director.persistence.actor_cache import (
    ActorFeeCache,
    is_expired,
    normalize_actor_name,
)
from casting_director.persistence.document_store import (
    SERVER_TIMESTAMP,
    DocumentStore,
    MemoryDocumentStore,
    RedisDocumentStore,
)
from casting_director.persistence.redis_client import (
    close_async_redis_client,
    create_async_redis_client,
)

__all__ = [
    "ActorFeeCache",
    "DocumentStore",
    "MemoryDocumentStore",
    "RedisDocumentStore",
    "SERVER_TIMESTAMP",
    "close_async_redis_client",
    "create_async_redis_client",
    "is_expired",
    "normalize_actor_name",
]
