"""
Unit tests for PromptBuilder.
"""

import pytest
from jinja2 import TemplateNotFound

from casting_director.llm.prompt_builder import MAIN_CHARACTER_COUNT, PromptBuilder


def test_book_analysis_prompt(prompt_builder):
    prompt = prompt_builder.build_book_analysis("Dune", "Frank Herbert")
    
    assert prompt.prompt.startswith("Analyze the book 'Dune' by 'Frank Herbert'.")
    assert f"the {MAIN_CHARACTER_COUNT} most important main characters" in prompt.prompt
    assert "$1M and $300M" in prompt.system_instructions
    assert prompt.response_schema["type"] == "OBJECT"
    assert set(prompt.response_schema["required"]) >= {
        "popularity",
        "characters",
        "movieBudget",
        "castingBudget",
        "studio",
    }


def test_actor_fee_prompt(prompt_builder):
    prompt = prompt_builder.build_actor_fee("Tom Hanks")
    
    assert "'Tom Hanks'" in prompt.prompt
    assert "talent agent" in prompt.system_instructions
    assert prompt.response_schema["properties"]["fee"]["type"] == "NUMBER"
    assert prompt.response_schema["required"] == ["fee", "popularity"]


def test_movie_results_prompt_with_budgets(prompt_builder):
    prompt = prompt_builder.build_movie_results(
        book_name="Dune",
        book_popularity="Cult Classic",
        cast_details="Paul Atreides: Timothee Chalamet",
        movie_budget=165000000,
        casting_budget=40000000,
        spent_budget=45000000,
        went_over_budget=True,
    )
    
    assert "- Book: Dune (Popularity: Cult Classic)" in prompt.prompt
    assert "- Movie Budget: 165000000" in prompt.prompt
    assert "- Casting Budget: 40000000" in prompt.prompt
    assert "(Went Over Budget: true)" in prompt.prompt
    assert "Paul Atreides: Timothee Chalamet" in prompt.prompt
    assert "90s movie critic" in prompt.system_instructions
    assert set(prompt.response_schema["properties"]) == {"boxOffice", "awards", "summary"}


def test_movie_results_prompt_without_budgets(prompt_builder):
    prompt = prompt_builder.build_movie_results(
        book_name="Dune",
        book_popularity="Cult Classic",
        cast_details="Paul Atreides: Timothee Chalamet",
    )
    
    assert "- Movie Budget: unknown" in prompt.prompt
    assert "- Total Spent on Cast: unknown (Went Over Budget: unknown)" in prompt.prompt


def test_went_over_budget_false_is_rendered(prompt_builder):
    prompt = prompt_builder.build_movie_results(
        book_name="Dune",
        book_popularity="Cult Classic",
        cast_details="-",
        went_over_budget=False,
    )
    
    assert "(Went Over Budget: false)" in prompt.prompt


def test_schemas_are_shared_between_builds(prompt_builder):
    first = prompt_builder.build_actor_fee("A")
    second = prompt_builder.build_actor_fee("B")
    
    assert first.response_schema is second.response_schema


def test_missing_templates_fail_fast(tmp_path, test_settings):
    with pytest.raises(TemplateNotFound):
        PromptBuilder(templates_dir=tmp_path, schemas_dir=test_settings.SCHEMAS_DIR)
