"""
Custom exceptions for the LLM client layer.

Retry decisions inside GeminiClient are driven by typed attempt outcomes
(see casting_director.retry.outcomes), not by these exceptions. These are
what a logical call finally raises to its caller once it has concluded.
"""


class LLMClientError(Exception):
    """
    Base exception for all LLM client errors.
    
    All LLM-specific exceptions inherit from this to allow catching
    any LLM-related error with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LLMNonRetryableError(LLMClientError):
    """
    Raised when Gemini answers with a 4xx status other than 429.
    
    Bad request, invalid API key, unknown model... Retrying the same
    payload cannot succeed, so the call fails on the first such response.
    """
    
    def __init__(self, status_code: int, model: str):
        super().__init__(
            f"HTTP error! status: {status_code} (non-retryable)",
            details={"status": status_code, "model": model},
        )
        self.status_code = status_code


class LLMInvalidResponseError(LLMClientError):
    """
    Raised when a successfully parsed JSON result does not fit the typed
    model a service expects (e.g. an actor fee without a numeric fee).
    """
    pass
