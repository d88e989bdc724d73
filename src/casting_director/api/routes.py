"""
HTTP routes of the casting director API.

Each POST endpoint validates its required body fields, delegates to a
service and converts any service failure into a 500 error body.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from casting_director.api.dependencies import (
    get_actor_fee_service,
    get_book_analysis_service,
    get_document_store,
    get_llm_client,
    get_movie_results_service,
    get_settings,
)
from casting_director.api.error_handlers import MissingParametersError, ServiceFailure
from casting_director.api.models import (
    ActorFeeRequest,
    BookInfoRequest,
    ErrorResponse,
    HealthResponse,
    MovieResultsRequest,
)
from casting_director.api.validation import validate_required_params
from casting_director.config import Settings
from casting_director.llm.base_client import BaseLLMClient
from casting_director.models.cache_models import ActorFee
from casting_director.persistence.document_store import DocumentStore
from casting_director.services.actor_fee import ActorFeeService
from casting_director.services.book_analysis import BookAnalysisService
from casting_director.services.movie_results import MovieDetails, MovieResultsService

logger = structlog.get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid parameters"},
    405: {"model": ErrorResponse, "description": "Method not allowed"},
    500: {"model": ErrorResponse, "description": "Upstream model call failed"},
}


def _require(payload: Optional[Dict[str, Any]], required: list[str]) -> Dict[str, Any]:
    body = payload or {}
    missing = validate_required_params(body, required)
    if missing:
        raise MissingParametersError(missing)
    return body


@router.post(
    "/getBookInfo",
    summary="Analyze a book for casting",
    responses=ERROR_RESPONSES,
)
async def get_book_info(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: BookAnalysisService = Depends(get_book_analysis_service),
) -> Dict[str, Any]:
    """
    Return popularity, main characters, budget and a description for a book.
    
    Body: {"bookName": str, "author": str}
    """
    request = BookInfoRequest.model_validate(_require(payload, ["bookName", "author"]))
    try:
        return await service.analyze(request.book_name, request.author)
    except Exception as e:
        logger.error("Error in getBookInfo", book_name=request.book_name, exc_info=e)
        raise ServiceFailure("Failed to get book information") from e


@router.post(
    "/getActorFee",
    response_model=ActorFee,
    summary="Estimate an actor's per-movie fee",
    responses=ERROR_RESPONSES,
)
async def get_actor_fee(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: ActorFeeService = Depends(get_actor_fee_service),
) -> ActorFee:
    """
    Return {"fee", "popularity"} for an actor, served from a 30-day cache.
    
    Body: {"actorName": str}
    """
    request = ActorFeeRequest.model_validate(_require(payload, ["actorName"]))
    try:
        return await service.get_or_fetch(request.actor_name)
    except Exception as e:
        logger.error("Error in getActorFee", actor_name=request.actor_name, exc_info=e)
        raise ServiceFailure("Failed to get actor fee") from e


@router.post(
    "/generateMovieResults",
    summary="Generate box office, awards and a summary for the finished movie",
    responses=ERROR_RESPONSES,
)
async def generate_movie_results(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: MovieResultsService = Depends(get_movie_results_service),
) -> Dict[str, Any]:
    """
    Body: {"bookName", "bookPopularity", "castDetails", "movieBudget"?,
    "castingBudget"?, "spentBudget"?, "wentOverBudget"?}
    """
    request = MovieResultsRequest.model_validate(
        _require(payload, ["bookName", "bookPopularity", "castDetails"])
    )
    movie = MovieDetails(
        book_name=request.book_name,
        book_popularity=request.book_popularity,
        cast_details=request.cast_details,
        movie_budget=request.movie_budget,
        casting_budget=request.casting_budget,
        spent_budget=request.spent_budget,
        went_over_budget=request.went_over_budget,
    )
    try:
        return await service.generate(movie)
    except Exception as e:
        logger.error("Error in generateMovieResults", book_name=request.book_name, exc_info=e)
        raise ServiceFailure(
            "Failed to generate movie results", details={"details": str(e)}
        ) from e


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    responses={503: {"model": HealthResponse, "description": "Gemini unreachable"}},
)
async def health_check(
    llm_client: BaseLLMClient = Depends(get_llm_client),
    document_store: DocumentStore = Depends(get_document_store),
    settings: Settings = Depends(get_settings),
):
    """
    Check Gemini and document store reachability.
    
    healthy: both reachable. degraded: store down (lookups fall through to
    Gemini). unhealthy: Gemini down, returned with 503.
    """
    gemini_ok = await llm_client.health_check()
    store_ok = await document_store.ping()
    
    if not gemini_ok:
        overall = "unhealthy"
    elif not store_ok:
        overall = "degraded"
    else:
        overall = "healthy"
    
    health = HealthResponse(
        status=overall,
        version=settings.APP_VERSION,
        services={
            "gemini": "ok" if gemini_ok else "unreachable",
            "document_store": "ok" if store_ok else "unreachable",
        },
    )
    if overall == "unhealthy":
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=health.model_dump(mode="json"),
        )
    return health
