"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from casting_director.config import PACKAGE_DIR, Settings


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.
    
    Override specific settings in individual tests as needed:
        def test_something(test_settings):
            test_settings.GEMINI_MODEL = "gemini-2.5-pro"
    """
    return Settings(
        # === Application ===
        APP_NAME="Casting Director API (Test)",
        APP_VERSION="0.1.0",
        DEBUG=True,
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",
        
        # === Gemini ===
        GEMINI_API_KEY="test-api-key",
        GEMINI_BASE_URL="https://gemini.test",
        GEMINI_API_VERSION="v1beta",
        GEMINI_MODEL="gemini-2.5-flash",
        GEMINI_PRO_MODEL="gemini-2.5-pro",
        GEMINI_TIMEOUT=5,
        
        # === Document Store ===
        DOCUMENT_STORE_BACKEND="memory",
        REDIS_URL="redis://localhost:6379/0",
        REDIS_MAX_CONNECTIONS=10,
        APP_ID="test-app",
        
        # === Prompts ===
        PROMPT_TEMPLATES_DIR=str(PACKAGE_DIR / "llm" / "templates"),
        SCHEMAS_DIR=str(PACKAGE_DIR / "llm" / "schemas"),
        
        PROMETHEUS_ENABLED=False,  # Disable metrics in tests unless explicitly needed
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def book_analysis_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Book analysis object as Gemini returns it (already parsed)."""
    with open(fixtures_dir / "book_analysis.json") as f:
        return json.load(f)


@pytest.fixture
def movie_results_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Movie results object as Gemini returns it (already parsed)."""
    with open(fixtures_dir / "movie_results.json") as f:
        return json.load(f)


def gemini_envelope(payload: Any) -> Dict[str, Any]:
    """Wrap a model output the way generateContent returns it."""
    text = payload if isinstance(payload, str) else json.dumps(payload)
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 40},
    }


@pytest.fixture
def make_envelope():
    """Factory fixture building generateContent response bodies.
    
    Usage:
        def test_something(make_envelope):
            body = make_envelope({"fee": 1.0, "popularity": "A-List"})
    """
    return gemini_envelope
