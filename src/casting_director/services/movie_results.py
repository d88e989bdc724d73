"""
Movie results generation.

Produces a hypothetical box office gross, awards list and critic summary for
the adaptation, from the book, the budgets and the chosen cast. Uses the Pro
model, which is slower but writes better reviews.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog

from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.prompt_builder import PromptBuilder

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MovieDetails:
    """Production data for the finished movie."""

    book_name: str
    book_popularity: str
    cast_details: str
    movie_budget: Optional[float] = None
    casting_budget: Optional[float] = None
    spent_budget: Optional[float] = None
    went_over_budget: Optional[bool] = None


class MovieResultsService:
    def __init__(self, llm_client: BaseLLMClient, prompt_builder: PromptBuilder, model: str):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.model = model

    async def generate(self, movie: MovieDetails) -> Dict[str, Any]:
        """
        Returns:
            Gemini's JSON object (boxOffice, awards, summary)
        """
        logger.info("Generating movie results", book_name=movie.book_name, model=self.model)
        prompt = self.prompt_builder.build_movie_results(
            book_name=movie.book_name,
            book_popularity=movie.book_popularity,
            cast_details=movie.cast_details,
            movie_budget=movie.movie_budget,
            casting_budget=movie.casting_budget,
            spent_budget=movie.spent_budget,
            went_over_budget=movie.went_over_budget,
        )
        result = await self.llm_client.call(
            model=self.model,
            prompt=prompt.prompt,
            system_instructions=prompt.system_instructions,
            response_schema=prompt.response_schema,
        )
        logger.info("Successfully generated movie results", book_name=movie.book_name)
        return result
