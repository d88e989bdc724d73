"""
Data models for the Casting Director backend.

- llm_models: Gemini generateContent request and response envelope
- cache_models: Actor fee lookup result and its cached document form
"""

from casting_director.models.cache_models import ActorFee, CacheEntry
from casting_director.models.llm_models import (
    Candidate,
    CandidateContent,
    ContentPart,
    GenerateContentResponse,
    GenerationRequest,
)

__all__ = [
    "ActorFee",
    "CacheEntry",
    "Candidate",
    "CandidateContent",
    "ContentPart",
    "GenerateContentResponse",
    "GenerationRequest",
]
