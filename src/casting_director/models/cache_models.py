"""
Actor fee models.

ActorFee is what callers see. CacheEntry is the document persisted in the
store under the normalized actor name; field aliases match the stored
document keys (actorName, fee, popularity, cachedAt, source).
"""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ActorFee(BaseModel):
    """Estimated per-movie booking fee and popularity tier for an actor."""

    fee: float = Field(..., description="Per-movie booking fee in US dollars")
    popularity: str = Field(
        ...,
        description="Free-text tier supplied by the model, e.g. 'A-List', 'Working Actor', 'Up-and-Comer'"
    )


class CacheEntry(BaseModel):
    """
    Cached actor fee document.

    cached_at is assigned by the document store at write time (epoch seconds),
    never by this process.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    actor_name: str = Field(..., alias="actorName", description="Original casing, display only")
    fee: float
    popularity: str
    cached_at: float = Field(..., alias="cachedAt")
    source: str

    @field_validator("cached_at", mode="before")
    @classmethod
    def _require_positive_timestamp(cls, value: Any) -> Any:
        # bool is an int subclass; a flag is not a timestamp
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("cachedAt must be epoch seconds")
        if not math.isfinite(value) or value <= 0:
            raise ValueError("cachedAt must be a positive finite number")
        return value

    def to_actor_fee(self) -> ActorFee:
        return ActorFee(fee=self.fee, popularity=self.popularity)
