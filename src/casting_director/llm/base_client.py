"""
Abstract base client for structured LLM calls.

Services depend on this interface only, so the Gemini client can be
replaced by a fake in tests or by another provider.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

import structlog

logger = structlog.get_logger(__name__)


class BaseLLMClient(ABC):
    """
    Abstract base class for LLM clients returning structured JSON.
    
    Responsibilities:
    - Send one logical request, retrying transient failures
    - Return the parsed JSON object or raise an LLMClientError subclass
    - Provide a lightweight health check
    
    Does NOT handle:
    - Prompt construction (that's PromptBuilder's job)
    - Caching (that's ActorFeeCache's job)
    """
    
    @abstractmethod
    async def call(
        self,
        model: str,
        prompt: str,
        system_instructions: str,
        response_schema: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Ask the model a structured question.
        
        Args:
            model: Model id (e.g., "gemini-2.5-flash")
            prompt: User prompt
            system_instructions: System instructions
            response_schema: Schema describing the expected JSON shape
            
        Returns:
            Parsed JSON object produced by the model
            
        Raises:
            LLMNonRetryableError: 4xx response other than 429
            RetryExhausted: Every attempt failed with a retryable failure
        """
        pass
    
    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable.
        
        Returns:
            True if reachable, False otherwise. Never raises.
        """
        pass
    
    async def close(self):
        """Close client connections. Default implementation does nothing."""
        logger.debug("Closing LLM client", client_class=self.__class__.__name__)
