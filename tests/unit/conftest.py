"""Unit test fixtures (mocks and stubs).

Provides mock objects for testing without external dependencies.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from casting_director.config import Settings
from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.prompt_builder import PromptBuilder
from casting_director.persistence.document_store import MemoryDocumentStore
from casting_director.retry.engine import RetryEngine
from casting_director.retry.policy import BackoffPolicy


class FakeClock:
    """Settable clock returning epoch seconds."""
    
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays (seconds)."""
    
    def __init__(self):
        self.delays: List[float] = []
    
    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FakeLLMClient(BaseLLMClient):
    """LLM client returning canned results and recording every call."""
    
    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[Exception] = None):
        self.result = result if result is not None else {}
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.healthy = True
    
    async def call(
        self,
        model: str,
        prompt: str,
        system_instructions: str,
        response_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "system_instructions": system_instructions,
                "response_schema": response_schema,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result
    
    async def health_check(self) -> bool:
        return self.healthy


@pytest.fixture
def mock_async_redis():
    """Mock AsyncRedis client for unit tests (async)."""
    mock = AsyncMock()
    mock.set = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.time = AsyncMock(return_value=(1_700_000_000, 123456))
    mock.ping = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def zero_jitter() -> Callable[[], float]:
    """rng for BackoffPolicy that always yields 0 jitter."""
    return lambda: 0.0


@pytest.fixture
def retry_engine(recording_sleep: RecordingSleep, zero_jitter) -> RetryEngine:
    """Retry engine with default policy, no jitter and no real waiting."""
    return RetryEngine(BackoffPolicy(rng=zero_jitter), sleep=recording_sleep)


@pytest.fixture
def memory_store(fake_clock: FakeClock) -> MemoryDocumentStore:
    return MemoryDocumentStore(clock=fake_clock)


@pytest.fixture
def prompt_builder(test_settings: Settings) -> PromptBuilder:
    return PromptBuilder(
        templates_dir=Path(test_settings.PROMPT_TEMPLATES_DIR),
        schemas_dir=Path(test_settings.SCHEMAS_DIR),
    )


@pytest.fixture
def fake_llm_client() -> FakeLLMClient:
    return FakeLLMClient(result={"fee": 20_000_000, "popularity": "A-List"})


@pytest.fixture
def make_llm_client():
    """Factory fixture for FakeLLMClient.
    
    Usage:
        def test_something(make_llm_client):
            client = make_llm_client(error=LLMNonRetryableError(400, "gemini-2.5-flash"))
    """
    return FakeLLMClient
