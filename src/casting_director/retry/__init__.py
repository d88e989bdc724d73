"""
Retry engine for Gemini calls.

A logical call is retried up to MAX_ATTEMPTS times with exponential backoff
and jitter. Attempts report typed outcomes:

1. **Success**: parsed JSON object, returned immediately
2. **RetryableFailure**: 5xx, 429, unfollowed 3xx, network error, malformed 2xx response
3. **TerminalFailure**: 4xx other than 429, raised immediately

Main Components:
    - RetryEngine: Attempt loop
    - BackoffPolicy: Delay formula and status classification
    - RetryState: Attempt counter for one call
    - RetryExhausted: Raised when the final attempt fails
"""

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

__all__ = [
    "AttemptOutcome",
    "BackoffPolicy",
    "FailureKind",
    "RetryEngine",
    "RetryExhausted",
    "RetryState",
    "RetryableFailure",
    "Success",
    "TerminalFailure",
]
