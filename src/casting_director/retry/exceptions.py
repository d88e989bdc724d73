"""
Retry engine exceptions.

RetryExhausted is raised when every attempt of a logical call failed with a
retryable failure. It is an LLMClientError so callers can treat all client
failures alike.
"""

from casting_director.llm.exceptions import LLMClientError
from casting_director.retry.outcomes import RetryableFailure


class RetryExhausted(LLMClientError):
    """
    Raised when all attempts of a logical call failed.
    
    Attributes:
        attempts: Number of attempts made
        last_failure: Failure observed on the final attempt
    """

    def __init__(self, attempts: int, last_failure: RetryableFailure) -> None:
        self.attempts = attempts
        self.last_failure = last_failure
        super().__init__(
            f"API call failed after {attempts} attempts: {last_failure.reason}",
            details={
                "attempts": attempts,
                "last_failure": last_failure.kind.value,
                "status": last_failure.status_code,
                **last_failure.details,
            },
        )
