"""
Retry engine for a single logical call.

The engine is an explicit loop over attempts. Each attempt returns a typed
outcome; the engine decides whether to return, raise, or wait and try again.
Waiting uses ``await sleep(...)`` so only the current call is suspended.

Usage:
    engine = RetryEngine(BackoffPolicy())
    payload = await engine.run(attempt_fn, model="gemini-2.5-flash")
"""

import asyncio
from typing import Any, Awaitable, Callable

import structlog

from casting_director.llm.exceptions import LLMClientError, LLMNonRetryableError
from casting_director.monitoring.metrics import llm_attempts_total
from casting_director.retry.exceptions import RetryExhausted
from casting_director.retry.outcomes import (
    AttemptOutcome,
    RetryableFailure,
    Success,
    TerminalFailure,
)
from casting_director.retry.policy import BackoffPolicy
from casting_director.retry.state import RetryState

logger = structlog.get_logger(__name__)

AttemptFn = Callable[[RetryState], Awaitable[AttemptOutcome]]


class RetryEngine:
    """
    Drive attempts until success, a terminal failure, or the attempt cap.
    
    Attributes:
        policy: Backoff policy (attempt cap, delays, jitter)
        sleep: Coroutine used to wait between attempts (seconds)
    """

    def __init__(
        self,
        policy: BackoffPolicy,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.policy = policy
        self.sleep = sleep

    async def run(self, attempt_fn: AttemptFn, model: str) -> dict[str, Any]:
        """
        Execute ``attempt_fn`` with the retry policy.
        
        Args:
            attempt_fn: Coroutine performing one attempt
            model: Model id, for logs and metrics
        
        Returns:
            Parsed JSON object from the first successful attempt
        
        Raises:
            LLMNonRetryableError: A terminal HTTP failure (4xx except 429)
            RetryExhausted: The final attempt failed
        """
        max_attempts = self.policy.max_attempts

        for attempt in range(max_attempts):
            state = RetryState(attempt=attempt, max_attempts=max_attempts)
            outcome = await attempt_fn(state)

            if isinstance(outcome, Success):
                llm_attempts_total.labels(model=model, result="success").inc()
                if attempt > 0:
                    logger.info(
                        "Gemini call succeeded after retry",
                        model=model,
                        attempts=state.number,
                    )
                return outcome.payload

            llm_attempts_total.labels(model=model, result=outcome.kind.value).inc()

            if isinstance(outcome, TerminalFailure):
                logger.error(
                    "Gemini call failed with non-retryable error",
                    model=model,
                    attempt=state.number,
                    status_code=outcome.status_code,
                    reason=outcome.reason,
                )
                if outcome.status_code is not None:
                    raise LLMNonRetryableError(outcome.status_code, model)
                raise LLMClientError(outcome.reason, details=outcome.details)

            if state.is_last_attempt:
                logger.error(
                    "Gemini call failed on final attempt",
                    model=model,
                    attempts=state.number,
                    failure=outcome.kind.value,
                    status_code=outcome.status_code,
                    reason=outcome.reason,
                )
                raise RetryExhausted(attempts=state.number, last_failure=outcome)

            delay_ms = self.policy.delay_ms(attempt, outcome.status_code)
            logger.warning(
                "Gemini attempt failed, retrying",
                model=model,
                attempt=state.number,
                max_attempts=max_attempts,
                failure=outcome.kind.value,
                status_code=outcome.status_code,
                reason=outcome.reason,
                delay_ms=round(delay_ms),
            )
            await self.sleep(delay_ms / 1000.0)

        # range(max_attempts) always returns or raises above
        raise AssertionError("retry loop exited without an outcome")
