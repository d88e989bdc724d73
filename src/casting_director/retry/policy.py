"""
Backoff policy for Gemini calls.

Classification:
    - 2xx: handled by the caller (success or malformed response)
    - 4xx other than 429: terminal, never retried
    - every other non-2xx status (429, 5xx, unfollowed 3xx): retryable
    - no response (network error): retryable

Delay before retry number ``attempt_index`` (0 for the first retry):

    base * 2 ** attempt_index + jitter

where base is 3000 ms for HTTP 503 and 2000 ms otherwise, and jitter is
uniform in [0, 1000) ms.
"""

import random
from typing import Callable

from casting_director.config import Settings

SERVICE_UNAVAILABLE = 503
TOO_MANY_REQUESTS = 429


class BackoffPolicy:
    """
    Exponential backoff with jitter and HTTP status classification.
    
    Attributes:
        max_attempts: Total attempts per logical call (initial + retries)
        base_delay_ms: Base delay for 5xx, 429, network and malformed failures
        unavailable_base_delay_ms: Base delay for HTTP 503
        max_jitter_ms: Upper bound (exclusive) of the random jitter
    """

    def __init__(
        self,
        max_attempts: int = 6,
        base_delay_ms: int = 2000,
        unavailable_base_delay_ms: int = 3000,
        max_jitter_ms: int = 1000,
        rng: Callable[[], float] = random.random,
    ):
        """
        Initialize backoff policy.
        
        Args:
            max_attempts: Total attempts per logical call
            base_delay_ms: Default base delay in milliseconds
            unavailable_base_delay_ms: Base delay for HTTP 503 in milliseconds
            max_jitter_ms: Jitter upper bound in milliseconds
            rng: Source of uniform floats in [0, 1), injectable for tests
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self.unavailable_base_delay_ms = unavailable_base_delay_ms
        self.max_jitter_ms = max_jitter_ms
        self._rng = rng

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackoffPolicy":
        return cls(
            max_attempts=settings.MAX_ATTEMPTS,
            base_delay_ms=settings.RETRY_BASE_DELAY_MS,
            unavailable_base_delay_ms=settings.RETRY_UNAVAILABLE_BASE_DELAY_MS,
            max_jitter_ms=settings.RETRY_MAX_JITTER_MS,
        )

    @staticmethod
    def is_retryable_status(status_code: int) -> bool:
        """False only for 4xx other than 429; any other error status is retried."""
        if status_code == TOO_MANY_REQUESTS:
            return True
        return not 400 <= status_code <= 499

    def base_delay_for(self, status_code: int | None) -> int:
        if status_code == SERVICE_UNAVAILABLE:
            return self.unavailable_base_delay_ms
        return self.base_delay_ms

    def delay_ms(self, attempt_index: int, status_code: int | None = None) -> float:
        """
        Compute the wait before the next attempt.
        
        Args:
            attempt_index: 0-based index of the attempt that just failed
            status_code: HTTP status of the failure (None for network/malformed)
        
        Returns:
            Delay in milliseconds
        """
        exponential = self.base_delay_for(status_code) * (2 ** attempt_index)
        jitter = self._rng() * self.max_jitter_ms
        return exponential + jitter
