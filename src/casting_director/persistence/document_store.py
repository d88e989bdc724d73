"""
Document stores for cached data.

A document store offers get/set by path with a store-assigned timestamp:
any field whose value is SERVER_TIMESTAMP is replaced at write time with the
store's clock (epoch seconds), so the writing process cannot influence it.

Implementations:
- RedisDocumentStore: one JSON string per key, clock from Redis TIME
- MemoryDocumentStore: in-process dict (local development, tests)
"""

import copy
import json
import time
from typing import Any, Callable, Dict, Optional, Protocol

import structlog
from redis.asyncio import Redis as AsyncRedis

logger = structlog.get_logger(__name__)


class _ServerTimestamp:
    """Sentinel replaced by the store clock when a document is written."""

    _instance: Optional["_ServerTimestamp"] = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


def resolve_server_timestamps(data: Dict[str, Any], now_seconds: int) -> Dict[str, Any]:
    """Return a copy of ``data`` with every SERVER_TIMESTAMP field set to ``now_seconds``."""
    return {
        key: now_seconds if value is SERVER_TIMESTAMP else value
        for key, value in data.items()
    }


class DocumentStore(Protocol):
    """
    Minimal document store interface used by the caches.
    
    Reads and writes are independent single-document operations; there is
    no transaction or lock, so concurrent writers resolve as last write wins.
    """

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        """Return the document at ``path`` or None if it does not exist."""
        ...

    async def set_document(self, path: str, data: Dict[str, Any]) -> None:
        """Overwrite the document at ``path`` with ``data``."""
        ...

    async def ping(self) -> bool:
        """True if the store is reachable. Never raises."""
        ...

    async def close(self) -> None:
        ...


class RedisDocumentStore:
    """
    Document store on Redis.
    
    Storage Strategy:
    - Key: the document path (e.g. "artifacts/<appId>/public/data/actorCache/tom hanks")
    - Value: JSON-encoded document
    - No Redis TTL: expiry is decided by readers
    """

    def __init__(self, redis_client: AsyncRedis):
        """
        Initialize store.
        
        Args:
            redis_client: Async Redis client (owned by the caller)
        """
        self.redis = redis_client

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        raw = await self.redis.get(path)
        if raw is None:
            return None
        return json.loads(raw)

    async def set_document(self, path: str, data: Dict[str, Any]) -> None:
        # TIME returns (seconds, microseconds) from the Redis server clock
        seconds, _microseconds = await self.redis.time()
        document = resolve_server_timestamps(data, int(seconds))
        await self.redis.set(path, json.dumps(document))

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            logger.warning("Redis ping failed", error_type=type(e).__name__, error=str(e))
            return False

    async def close(self) -> None:
        """No-op: the Redis client is closed by whoever created it."""


class MemoryDocumentStore:
    """
    In-process document store.
    
    Documents are deep-copied on the way in and out so callers never share
    mutable state with the store.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        """
        Initialize store.
        
        Args:
            clock: Store clock returning epoch seconds (injectable for tests)
        """
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._clock = clock

    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        document = self._documents.get(path)
        return copy.deepcopy(document) if document is not None else None

    async def set_document(self, path: str, data: Dict[str, Any]) -> None:
        document = resolve_server_timestamps(data, int(self._clock()))
        self._documents[path] = copy.deepcopy(document)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._documents.clear()

    def __len__(self) -> int:
        return len(self._documents)
