"""
FastAPI dependency injection for the casting director API.

Long-lived resources (HTTP client, document store, services) are built once
by the application lifespan and stored on ``app.state.services``. The
getters below hand them to route handlers; tests replace them through
``app.dependency_overrides`` or by assigning their own container.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from fastapi import Request
from redis.asyncio import Redis as AsyncRedis

from casting_director.config import Settings
from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.prompt_builder import PromptBuilder
from casting_director.persistence.actor_cache import ActorFeeCache
from casting_director.persistence.document_store import DocumentStore
from casting_director.services.actor_fee import ActorFeeService
from casting_director.services.book_analysis import BookAnalysisService
from casting_director.services.movie_results import MovieResultsService


def get_settings(request: Request) -> Settings:
    """Settings the running app was created with (set by create_app)."""
    return request.app.state.settings


@dataclass
class ServiceContainer:
    """Resources shared by all requests for the lifetime of the app."""
    
    llm_client: BaseLLMClient
    document_store: DocumentStore
    actor_fee_service: ActorFeeService
    book_analysis_service: BookAnalysisService
    movie_results_service: MovieResultsService
    redis_client: Optional[AsyncRedis] = None
    
    @classmethod
    def build(
        cls,
        settings: Settings,
        llm_client: BaseLLMClient,
        document_store: DocumentStore,
        redis_client: Optional[AsyncRedis] = None,
        clock: Callable[[], float] = time.time,
    ) -> "ServiceContainer":
        """
        Wire services from settings and already-constructed clients.
        
        Args:
            settings: Application settings
            llm_client: Gemini client (or a fake in tests)
            document_store: Backing store of the actor fee cache
            redis_client: Redis client owning the store's connections, if any
            clock: Epoch-seconds clock the cache judges expiry with
        """
        prompt_builder = PromptBuilder(
            templates_dir=Path(settings.PROMPT_TEMPLATES_DIR),
            schemas_dir=Path(settings.SCHEMAS_DIR),
        )
        cache = ActorFeeCache(
            document_store,
            app_id=settings.APP_ID,
            ttl_seconds=settings.ACTOR_CACHE_TTL_SECONDS,
            source=settings.ACTOR_CACHE_SOURCE,
            clock=clock,
        )
        return cls(
            llm_client=llm_client,
            document_store=document_store,
            actor_fee_service=ActorFeeService(
                llm_client, cache, prompt_builder, model=settings.GEMINI_MODEL
            ),
            book_analysis_service=BookAnalysisService(
                llm_client, prompt_builder, model=settings.GEMINI_MODEL
            ),
            movie_results_service=MovieResultsService(
                llm_client, prompt_builder, model=settings.GEMINI_PRO_MODEL
            ),
            redis_client=redis_client,
        )


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_llm_client(request: Request) -> BaseLLMClient:
    return get_services(request).llm_client


def get_document_store(request: Request) -> DocumentStore:
    return get_services(request).document_store


def get_actor_fee_service(request: Request) -> ActorFeeService:
    return get_services(request).actor_fee_service


def get_book_analysis_service(request: Request) -> BookAnalysisService:
    return get_services(request).book_analysis_service


def get_movie_results_service(request: Request) -> MovieResultsService:
    return get_services(request).movie_results_service
