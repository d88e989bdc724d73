"""
Actor fee lookups with caching.

Flow:
    cache.get(name) -> hit: return (no Gemini call)
                    -> miss: Gemini call -> cache.set (best effort) -> return

Concurrent misses for the same actor are not collapsed: each issues its own
Gemini call and the last cache write wins. Entries are re-derivations of the
same estimate, so this only costs an extra call.
"""

from typing import Any, Dict

import structlog
from pydantic import ValidationError as PydanticValidationError

from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.exceptions import LLMInvalidResponseError
from casting_director.llm.prompt_builder import PromptBuilder
from casting_director.models.cache_models import ActorFee
from casting_director.persistence.actor_cache import ActorFeeCache

logger = structlog.get_logger(__name__)


class ActorFeeService:
    """
    Estimate actor fees through a 30-day cache in front of Gemini.
    
    Attributes:
        llm_client: Client used on cache misses
        cache: Actor fee cache
        prompt_builder: Builds the actor fee prompt and schema
        model: Gemini model id
    """

    def __init__(
        self,
        llm_client: BaseLLMClient,
        cache: ActorFeeCache,
        prompt_builder: PromptBuilder,
        model: str,
    ):
        self.llm_client = llm_client
        self.cache = cache
        self.prompt_builder = prompt_builder
        self.model = model

    async def fetch_from_api(self, actor_name: str) -> ActorFee:
        """
        Ask Gemini for an actor's fee, bypassing the cache.
        
        Raises:
            LLMClientError: Gemini call failed
            LLMInvalidResponseError: Response lacks a numeric fee or popularity
        """
        prompt = self.prompt_builder.build_actor_fee(actor_name)
        result: Dict[str, Any] = await self.llm_client.call(
            model=self.model,
            prompt=prompt.prompt,
            system_instructions=prompt.system_instructions,
            response_schema=prompt.response_schema,
        )
        try:
            return ActorFee.model_validate(result)
        except PydanticValidationError as e:
            raise LLMInvalidResponseError(
                "Actor fee response does not match schema",
                details={"actor_name": actor_name, "errors": e.errors(include_url=False)},
            ) from e

    async def get_or_fetch(self, actor_name: str) -> ActorFee:
        """
        Return the actor's fee from cache, or from Gemini on a miss.
        
        Exactly one Gemini call per miss, none per hit. Cache failures never
        surface here; Gemini failures do.
        """
        cached = await self.cache.get(actor_name)
        if cached is not None:
            return cached

        actor_fee = await self.fetch_from_api(actor_name)
        await self.cache.set(actor_name, actor_fee)

        logger.info(
            "Actor fee fetched from Gemini",
            actor_name=actor_name,
            fee=actor_fee.fee,
            popularity=actor_fee.popularity,
        )
        return actor_fee
