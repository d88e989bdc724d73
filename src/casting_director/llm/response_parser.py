"""
Structured decoding of the generateContent response envelope.

Gemini wraps the model output as a JSON string nested in
candidates[0].content.parts[0].text. Decoding validates each level
explicitly and reports problems as a MalformedResponse value instead of
raising, so the caller can apply the retry policy to it.
"""

import json
from dataclasses import dataclass
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError

from casting_director.models.llm_models import GenerateContentResponse

logger = structlog.get_logger(__name__)

SNIPPET_LENGTH = 500


@dataclass(frozen=True)
class MalformedResponse:
    """
    A 2xx response that does not carry a usable JSON object.
    
    Attributes:
        reason: Human-readable description
        snippet: First characters of the offending content (for debugging)
    """

    reason: str
    snippet: str = ""


def decode_generate_content(body: Any) -> dict[str, Any] | MalformedResponse:
    """
    Extract and parse the JSON object returned by the model.
    
    Args:
        body: Decoded JSON body of a successful generateContent response
    
    Returns:
        The parsed JSON object, or MalformedResponse describing what is missing
    """
    try:
        envelope = GenerateContentResponse.model_validate(body)
    except PydanticValidationError as e:
        missing = ", ".join(
            ".".join(str(part) for part in error["loc"]) or "<root>"
            for error in e.errors()
        )
        return MalformedResponse(
            reason=f"Invalid API response structure ({missing})",
            snippet=str(body)[:SNIPPET_LENGTH],
        )

    return parse_json_object(envelope.text)


def parse_json_object(text: str) -> dict[str, Any] | MalformedResponse:
    """
    Parse the model's text payload as a JSON object.
    
    Args:
        text: Raw text from the first content part
    
    Returns:
        Parsed dict, or MalformedResponse on invalid JSON or a non-object value
    """
    if not text.strip():
        return MalformedResponse(reason="Model returned empty text")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        logger.debug("Model text is not valid JSON", error=e.msg, line=e.lineno, col=e.colno)
        return MalformedResponse(
            reason=f"Model text is not valid JSON: {e.msg} at line {e.lineno} col {e.colno}",
            snippet=text[:SNIPPET_LENGTH],
        )

    if not isinstance(parsed, dict):
        return MalformedResponse(
            reason=f"Model text is not a JSON object (got {type(parsed).__name__})",
            snippet=text[:SNIPPET_LENGTH],
        )

    return parsed
