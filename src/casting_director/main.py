"""
FastAPI application entry point for the casting director backend.
"""

from contextlib import asynccontextmanager
from typing import Optional, Tuple

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from redis.asyncio import Redis as AsyncRedis

from casting_director.api.dependencies import ServiceContainer
from casting_director.api.error_handlers import EXCEPTION_HANDLERS
from casting_director.api.middleware import RequestTracingMiddleware
from casting_director.api.routes import router
from casting_director.config import Settings, settings
from casting_director.llm.gemini_client import GeminiClient
from casting_director.logging_config import configure_logging
from casting_director.persistence.document_store import (
    DocumentStore,
    MemoryDocumentStore,
    RedisDocumentStore,
)
from casting_director.persistence.redis_client import (
    close_async_redis_client,
    create_async_redis_client,
)

# Configure structured logging before any other imports
configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


def create_document_store(app_settings: Settings) -> Tuple[DocumentStore, Optional[AsyncRedis]]:
    """
    Build the actor cache backend named by DOCUMENT_STORE_BACKEND.
    
    Returns:
        (document_store, redis_client or None)
    """
    backend = app_settings.DOCUMENT_STORE_BACKEND
    if backend == "redis":
        redis_client = create_async_redis_client(app_settings)
        return RedisDocumentStore(redis_client), redis_client
    if backend == "memory":
        return MemoryDocumentStore(), None
    raise ValueError(f"Unknown DOCUMENT_STORE_BACKEND: {backend}")


def create_app(app_settings: Settings = settings) -> FastAPI:
    """
    Build the FastAPI application.
    
    Args:
        app_settings: Settings used for every resource the lifespan creates
    """
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "Application startup",
            version=app_settings.APP_VERSION,
            environment=app_settings.ENVIRONMENT,
            model=app_settings.GEMINI_MODEL,
            pro_model=app_settings.GEMINI_PRO_MODEL,
            document_store=app_settings.DOCUMENT_STORE_BACKEND,
        )
        if not app_settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY is not set; Gemini calls will fail")
        
        document_store, redis_client = create_document_store(app_settings)
        llm_client = GeminiClient.from_settings(app_settings)
        app.state.services = ServiceContainer.build(
            app_settings, llm_client, document_store, redis_client=redis_client
        )
        logger.info("Application startup complete")
        
        try:
            yield
        finally:
            logger.info("Application shutdown")
            await llm_client.close()
            await document_store.close()
            if redis_client is not None:
                await close_async_redis_client(redis_client)
            logger.info("Application shutdown complete")
    
    app = FastAPI(
        title="Casting Director",
        description="Book analysis, actor fee estimates and movie outcomes backed by Gemini",
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    
    # Request tracing middleware (must be first for request_id in all logs)
    app.add_middleware(RequestTracingMiddleware)
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    for exc_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_class, handler)
    
    app.include_router(router, tags=["casting"])
    
    if app_settings.PROMETHEUS_ENABLED:
        Instrumentator().instrument(app).expose(app)
    
    @app.get("/")
    async def root():
        """Root endpoint with API documentation links."""
        return {
            "service": app_settings.APP_NAME,
            "version": app_settings.APP_VERSION,
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics" if app_settings.PROMETHEUS_ENABLED else None,
        }
    
    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run(
        "casting_director.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
