"""
API-specific request and response models for FastAPI endpoints.

Request bodies use the frontend's camelCase field names.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BookInfoRequest(BaseModel):
    """Body of POST /getBookInfo."""
    model_config = ConfigDict(populate_by_name=True)
    
    book_name: str = Field(alias="bookName", description="Title of the book")
    author: str = Field(description="Author of the book")


class ActorFeeRequest(BaseModel):
    """Body of POST /getActorFee."""
    model_config = ConfigDict(populate_by_name=True)
    
    actor_name: str = Field(alias="actorName", examples=["Tom Hanks"])


class MovieResultsRequest(BaseModel):
    """Body of POST /generateMovieResults."""
    model_config = ConfigDict(populate_by_name=True)
    
    book_name: str = Field(alias="bookName")
    book_popularity: str = Field(alias="bookPopularity", examples=["Massive Bestseller"])
    cast_details: str = Field(
        alias="castDetails",
        description="Formatted list of characters and the actors cast for them"
    )
    movie_budget: Optional[float] = Field(default=None, alias="movieBudget")
    casting_budget: Optional[float] = Field(default=None, alias="castingBudget")
    spent_budget: Optional[float] = Field(default=None, alias="spentBudget")
    went_over_budget: Optional[bool] = Field(default=None, alias="wentOverBudget")


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""
    model_config = ConfigDict(populate_by_name=True)
    
    error: str = Field(description="Short error message")
    status_code: int = Field(alias="statusCode")
    details: Optional[dict] = Field(default=None)


class HealthResponse(BaseModel):
    """Response for health check endpoint."""
    
    status: str = Field(
        description="Overall status",
        examples=["healthy", "degraded", "unhealthy"]
    )
    version: str
    services: dict[str, str] = Field(
        description="Per-dependency status: document_store, gemini"
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
