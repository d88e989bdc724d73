"""Book analysis for film adaptation."""

from typing import Any, Dict

import structlog

from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.prompt_builder import PromptBuilder

logger = structlog.get_logger(__name__)


class BookAnalysisService:
    """Analyze a book: main characters, movie and casting budgets, studio."""

    def __init__(self, llm_client: BaseLLMClient, prompt_builder: PromptBuilder, model: str):
        self.llm_client = llm_client
        self.prompt_builder = prompt_builder
        self.model = model

    async def analyze(self, book_name: str, author: str) -> Dict[str, Any]:
        """
        Returns:
            Gemini's JSON object (popularity, synopsis, characters,
            movieBudget, castingBudget, studio, budgetReasoning)
        """
        logger.info("Analyzing book", book_name=book_name, author=author)
        prompt = self.prompt_builder.build_book_analysis(book_name, author)
        return await self.llm_client.call(
            model=self.model,
            prompt=prompt.prompt,
            system_instructions=prompt.system_instructions,
            response_schema=prompt.response_schema,
        )
