"""
Prompt builder for Gemini requests.

Responsible for:
- Loading and rendering Jinja2 templates (system + user prompts)
- Loading the Gemini responseSchema for each request type
- Returning a StructuredPrompt ready for BaseLLMClient.call()
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from jinja2 import Environment, FileSystemLoader, StrictUndefined

logger = structlog.get_logger(__name__)

# Request type -> (system template, user template, schema file)
PROMPT_FILES = {
    "book_analysis": ("book_analysis_system.txt", "book_analysis_user.txt", "book_analysis.json"),
    "actor_fee": ("actor_fee_system.txt", "actor_fee_user.txt", "actor_fee.json"),
    "movie_results": ("movie_results_system.txt", "movie_results_user.txt", "movie_results.json"),
}

MAIN_CHARACTER_COUNT = 4


@dataclass(frozen=True)
class StructuredPrompt:
    """Everything the model needs for one structured question."""

    system_instructions: str
    prompt: str
    response_schema: Dict[str, Any]


class PromptBuilder:
    """
    Build prompts for the three request types: book analysis, actor fee,
    movie results.
    
    Templates and schemas are loaded once at construction; a missing file
    fails fast at startup.
    """
    
    def __init__(self, templates_dir: Path, schemas_dir: Path):
        """
        Initialize prompt builder.
        
        Args:
            templates_dir: Directory containing *_system.txt / *_user.txt templates
            schemas_dir: Directory containing Gemini responseSchema JSON files
        """
        self.templates_dir = Path(templates_dir)
        self.schemas_dir = Path(schemas_dir)
        
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False  # We're generating prompts, not HTML
        )
        
        self._system_prompts: Dict[str, str] = {}
        self._user_templates = {}
        self.schemas: Dict[str, Dict[str, Any]] = {}
        
        for kind, (system_file, user_file, schema_file) in PROMPT_FILES.items():
            try:
                # System prompts are static (no variables)
                self._system_prompts[kind] = self.jinja_env.get_template(system_file).render()
                self._user_templates[kind] = self.jinja_env.get_template(user_file)
                with open(self.schemas_dir / schema_file, "r", encoding="utf-8") as f:
                    self.schemas[kind] = json.load(f)
            except Exception as e:
                logger.error("Failed to load prompt resources", kind=kind, error=str(e))
                raise
        
        logger.info(
            "PromptBuilder initialized",
            templates_dir=str(self.templates_dir),
            schemas_dir=str(self.schemas_dir),
            prompt_kinds=sorted(PROMPT_FILES),
        )
    
    def _build(self, kind: str, **context: Any) -> StructuredPrompt:
        return StructuredPrompt(
            system_instructions=self._system_prompts[kind],
            prompt=self._user_templates[kind].render(**context),
            response_schema=self.schemas[kind],
        )
    
    def build_book_analysis(self, book_name: str, author: str) -> StructuredPrompt:
        """Prompt asking for characters, budgets and studio for a book."""
        return self._build(
            "book_analysis",
            book_name=book_name,
            author=author,
            character_count=MAIN_CHARACTER_COUNT,
        )
    
    def build_actor_fee(self, actor_name: str) -> StructuredPrompt:
        """Prompt asking for an actor's per-movie fee and popularity tier."""
        return self._build("actor_fee", actor_name=actor_name)
    
    def build_movie_results(
        self,
        book_name: str,
        book_popularity: str,
        cast_details: str,
        movie_budget: Optional[float] = None,
        casting_budget: Optional[float] = None,
        spent_budget: Optional[float] = None,
        went_over_budget: Optional[bool] = None,
    ) -> StructuredPrompt:
        """
        Prompt asking for box office, awards and a critic's summary.
        
        Budget fields are optional; missing ones render as "unknown".
        """
        return self._build(
            "movie_results",
            book_name=book_name,
            book_popularity=book_popularity,
            cast_details=cast_details,
            movie_budget=movie_budget,
            casting_budget=casting_budget,
            spent_budget=spent_budget,
            went_over_budget=went_over_budget,
        )
