"""
LLM client abstraction and implementations.

Components:
- BaseLLMClient: Abstract base class for structured LLM calls
- GeminiClient (gemini_client): Gemini generateContent client with retry
- PromptBuilder: Renders prompts and loads response schemas
- response_parser: Structured decoding of the generateContent envelope
- exceptions: LLM-specific exceptions

GeminiClient is imported from its module directly; it depends on the retry
package, which itself depends on the exceptions defined here.
"""

from casting_director.llm.base_client import BaseLLMClient
from casting_director.llm.exceptions import (
    LLMClientError,
    LLMInvalidResponseError,
    LLMNonRetryableError,
)
from casting_director.llm.prompt_builder import PromptBuilder, StructuredPrompt

__all__ = [
    "BaseLLMClient",
    "PromptBuilder",
    "StructuredPrompt",
    "LLMClientError",
    "LLMInvalidResponseError",
    "LLMNonRetryableError",
]
