"""
Gemini client implementation.

Communicates with the Gemini REST API (generateContent) using httpx
AsyncClient. Supports:
- Structured output via responseSchema + application/json MIME type
- Bounded exponential-backoff retry with jitter (see casting_director.retry)
- Connection pooling via a persistent AsyncClient
"""

import time
from typing import Any, Dict, Optional

import httpx
import structlog

from casting_director.config import Settings
from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.exceptions import LLMClientError
from casting_director.llm.response_parser import MalformedResponse, decode_generate_content
from casting_director.models.llm_models import GenerationRequest
from casting_director.monitoring.metrics import llm_latency_seconds, llm_requests_total
from casting_director.retry.engine import RetryEngine
from casting_director.retry.exceptions import RetryExhausted
from casting_director.retry.outcomes import (
    AttemptOutcome,
    FailureKind,
    RetryableFailure,
    Success,
    TerminalFailure,
)
from casting_director.retry.policy import BackoffPolicy
from casting_director.retry.state import RetryState

logger = structlog.get_logger(__name__)


class GeminiClient(BaseLLMClient):
    """
    Gemini generateContent client with retry.
    
    API Endpoints:
    - POST /{version}/models/{model}:generateContent?key=...: structured generation
    - GET /{version}/models?key=...&pageSize=1: model listing (health check)
    
    The API key travels as a query parameter and is never logged.
    """
    
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        api_version: str = "v1beta",
        timeout: int = 60,
        retry_engine: Optional[RetryEngine] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize Gemini client.
        
        Args:
            api_key: Gemini API key
            base_url: API host
            api_version: API version path segment
            timeout: Per-attempt request timeout in seconds
            retry_engine: Retry engine (default: BackoffPolicy defaults)
            http_client: Pre-built httpx client (tests inject a MockTransport here)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version.strip("/")
        self.timeout = timeout
        self.retry_engine = retry_engine or RetryEngine(BackoffPolicy())
        self._client = http_client
        
        logger.info(
            "Gemini client initialized",
            base_url=self.base_url,
            api_version=self.api_version,
            timeout=timeout,
            max_attempts=self.retry_engine.policy.max_attempts,
            api_key_configured=bool(api_key),
        )
    
    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "GeminiClient":
        return cls(
            api_key=settings.GEMINI_API_KEY,
            base_url=settings.GEMINI_BASE_URL,
            api_version=settings.GEMINI_API_VERSION,
            timeout=settings.GEMINI_TIMEOUT,
            retry_engine=RetryEngine(BackoffPolicy.from_settings(settings)),
            http_client=http_client,
        )
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                follow_redirects=True,
                limits=httpx.Limits(
                    max_keepalive_connections=5,
                    max_connections=20,
                    keepalive_expiry=30.0,
                ),
            )
            logger.debug("Created new httpx AsyncClient")
        return self._client
    
    def _generate_path(self, model: str) -> str:
        return f"/{self.api_version}/models/{model}:generateContent"
    
    async def call(
        self,
        model: str,
        prompt: str,
        system_instructions: str,
        response_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Ask Gemini a structured question, retrying transient failures.
        
        POST /v1beta/models/{model}:generateContent with payload:
        {
            "contents": [{"parts": [{"text": "..."}]}],
            "systemInstruction": {"parts": [{"text": "..."}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": {...}
            }
        }
        
        Response:
        {
            "candidates": [{"content": {"parts": [{"text": "<json string>"}]}}],
            "usageMetadata": {...}
        }
        """
        request = GenerationRequest(
            model=model,
            prompt=prompt,
            system_instructions=system_instructions,
            response_schema=response_schema,
        )
        # Built once: every attempt sends the identical body
        payload = request.to_payload()
        path = self._generate_path(model)
        
        logger.info(
            "Sending generation request to Gemini",
            model=model,
            prompt_length=len(prompt),
        )
        
        async def attempt(state: RetryState) -> AttemptOutcome:
            return await self._attempt(path, payload, model, state)
        
        start_time = time.perf_counter()
        try:
            result = await self.retry_engine.run(attempt, model=model)
        except RetryExhausted:
            llm_requests_total.labels(model=model, outcome="exhausted").inc()
            llm_latency_seconds.labels(model=model, success="false").observe(
                time.perf_counter() - start_time
            )
            raise
        except LLMClientError:
            llm_requests_total.labels(model=model, outcome="terminal").inc()
            llm_latency_seconds.labels(model=model, success="false").observe(
                time.perf_counter() - start_time
            )
            raise
        
        latency_s = time.perf_counter() - start_time
        llm_requests_total.labels(model=model, outcome="success").inc()
        llm_latency_seconds.labels(model=model, success="true").observe(latency_s)
        logger.info(
            "Gemini generation successful",
            model=model,
            latency_ms=int(latency_s * 1000),
        )
        return result
    
    async def _attempt(
        self,
        path: str,
        payload: Dict[str, Any],
        model: str,
        state: RetryState,
    ) -> AttemptOutcome:
        """Perform one HTTP attempt and classify the result."""
        client = await self._get_client()
        try:
            response = await client.post(
                path,
                params={"key": self.api_key},
                json=payload,
            )
        except httpx.RequestError as e:
            # No HTTP response obtained (DNS, connect, timeout, reset...)
            return RetryableFailure(
                kind=FailureKind.NETWORK_ERROR,
                reason=f"Network error: {type(e).__name__}: {e}",
                details={"error_type": type(e).__name__},
            )
        
        if not response.is_success:
            status_code = response.status_code
            logger.error(
                "Gemini HTTP error",
                model=model,
                status_code=status_code,
                attempt=state.number,
            )
            if BackoffPolicy.is_retryable_status(status_code):
                return RetryableFailure(
                    kind=FailureKind.HTTP_ERROR,
                    reason=f"HTTP error! status: {status_code}",
                    status_code=status_code,
                )
            return TerminalFailure(
                kind=FailureKind.HTTP_ERROR,
                reason=f"HTTP error! status: {status_code} (non-retryable)",
                status_code=status_code,
            )
        
        try:
            body = response.json()
        except ValueError:
            body = None
        
        decoded = decode_generate_content(body)
        if isinstance(decoded, MalformedResponse):
            logger.warning(
                "Gemini returned malformed response",
                model=model,
                attempt=state.number,
                reason=decoded.reason,
                snippet=decoded.snippet,
            )
            return RetryableFailure(
                kind=FailureKind.MALFORMED_RESPONSE,
                reason=decoded.reason,
            )
        
        return Success(payload=decoded)
    
    async def health_check(self) -> bool:
        """
        Check Gemini reachability via GET /{version}/models.
        
        Returns True if the API answers 200 for this key, False otherwise.
        """
        try:
            client = await self._get_client()
            response = await client.get(
                f"/{self.api_version}/models",
                params={"key": self.api_key, "pageSize": 1},
                timeout=5.0,
            )
            response.raise_for_status()
            logger.debug("Gemini health check passed")
            return True
        except httpx.HTTPError as e:
            logger.warning("Gemini health check failed", error_type=type(e).__name__)
            return False
    
    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed Gemini client connection")
    
    async def __aenter__(self):
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
