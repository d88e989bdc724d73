"""
Actor fee cache.

Caches Gemini actor fee estimates in a document store, keyed by the
normalized actor name, for 30 days. The cache never raises: store faults
turn reads into misses and writes into no-ops, so the caller always falls
through to the Gemini call.

Document path: artifacts/<appId>/public/data/actorCache/<normalized name>
Document fields: actorName, fee, popularity, cachedAt, source
"""

import math
import time
from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from casting_director.models.cache_models import ActorFee, CacheEntry
from casting_director.monitoring.metrics import (
    actor_cache_lookups_total,
    actor_cache_writes_total,
)
from casting_director.persistence.document_store import SERVER_TIMESTAMP, DocumentStore

logger = structlog.get_logger(__name__)

THIRTY_DAYS_SECONDS = 30 * 24 * 60 * 60


def normalize_actor_name(actor_name: str) -> str:
    """
    Normalize an actor name into its cache key.
    
    "  TOM HANKS " and "tom hanks" map to the same key; the display casing
    is kept in the document's actorName field.
    """
    return actor_name.strip().lower()


def is_expired(cached_at: Any, now: float, ttl_seconds: int = THIRTY_DAYS_SECONDS) -> bool:
    """
    Check whether a cached timestamp is outside the TTL window.
    
    Args:
        cached_at: Store-assigned epoch seconds (anything else counts as expired)
        now: Current epoch seconds
        ttl_seconds: Window length; an entry exactly ttl_seconds old is expired
    
    Returns:
        True if the entry must be treated as absent
    """
    if isinstance(cached_at, bool) or not isinstance(cached_at, (int, float)):
        return True
    if not math.isfinite(cached_at) or cached_at <= 0:
        return True
    return (now - cached_at) >= ttl_seconds


class ActorFeeCache:
    """
    TTL cache of actor fee estimates.
    
    Attributes:
        store: Document store holding the entries
        app_id: Application id used in the document path
        ttl_seconds: Time to live of an entry
        source: Provenance tag written with every entry
    """

    COLLECTION_PATH = "artifacts/{app_id}/public/data/actorCache"

    def __init__(
        self,
        store: DocumentStore,
        app_id: str = "default-app-id",
        ttl_seconds: int = THIRTY_DAYS_SECONDS,
        source: str = "gemini-api",
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize cache.
        
        Args:
            store: Document store
            app_id: Application id in the document path
            ttl_seconds: Entry time to live
            source: Provenance tag
            clock: Returns current epoch seconds (injectable for tests)
        """
        self.store = store
        self.app_id = app_id
        self.ttl_seconds = ttl_seconds
        self.source = source
        self._clock = clock

    def document_path(self, actor_name: str) -> str:
        collection = self.COLLECTION_PATH.format(app_id=self.app_id)
        return f"{collection}/{normalize_actor_name(actor_name)}"

    async def get(self, actor_name: str) -> Optional[ActorFee]:
        """
        Look up a cached fee.
        
        Returns:
            ActorFee on a valid hit; None on miss, expiry, malformed entry
            or store failure
        """
        path = self.document_path(actor_name)
        try:
            document = await self.store.get_document(path)
        except Exception as e:
            # Graceful degradation: a broken store behaves like an empty one
            logger.warning(
                "Cache check failed, falling back to API",
                actor_name=actor_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            actor_cache_lookups_total.labels(result="error").inc()
            return None

        if document is None:
            logger.info("Cache miss for actor", actor_name=actor_name)
            actor_cache_lookups_total.labels(result="miss").inc()
            return None

        if not isinstance(document, dict):
            logger.warning(
                "Ignoring malformed cache entry",
                actor_name=actor_name,
                document_type=type(document).__name__,
            )
            actor_cache_lookups_total.labels(result="invalid").inc()
            return None

        if is_expired(document.get("cachedAt"), self._clock(), self.ttl_seconds):
            logger.info("Cache expired for actor", actor_name=actor_name)
            actor_cache_lookups_total.labels(result="expired").inc()
            return None

        try:
            entry = CacheEntry.model_validate(document)
        except PydanticValidationError as e:
            logger.warning(
                "Ignoring malformed cache entry",
                actor_name=actor_name,
                errors=e.errors(include_url=False),
            )
            actor_cache_lookups_total.labels(result="invalid").inc()
            return None

        logger.info("Cache hit for actor", actor_name=actor_name)
        actor_cache_lookups_total.labels(result="hit").inc()
        return entry.to_actor_fee()

    async def set(self, actor_name: str, actor_fee: ActorFee) -> None:
        """
        Store a fee, overwriting any previous entry for the same normalized name.
        
        Failures are logged and swallowed; callers must not depend on the write.
        """
        path = self.document_path(actor_name)
        document = {
            "actorName": actor_name,
            "fee": actor_fee.fee,
            "popularity": actor_fee.popularity,
            "cachedAt": SERVER_TIMESTAMP,
            "source": self.source,
        }
        try:
            await self.store.set_document(path, document)
        except Exception as e:
            logger.warning(
                "Failed to cache actor data",
                actor_name=actor_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            actor_cache_writes_total.labels(success="false").inc()
            return

        logger.info("Cached actor data", actor_name=actor_name)
        actor_cache_writes_total.labels(success="true").inc()
