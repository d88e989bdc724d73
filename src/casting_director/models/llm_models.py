"""
Gemini-specific data models for the request/response cycle.

GenerationRequest is built once per logical call and rendered into the same
payload for every attempt. The response models describe the only part of the
generateContent envelope we rely on: candidates[0].content.parts[0].text.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class GenerationRequest(BaseModel):
    """
    One logical "ask the model a structured question" request.
    
    Frozen so that retries cannot mutate the prompt between attempts.
    """
    model_config = ConfigDict(frozen=True)
    
    model: str = Field(..., description="Gemini model id (e.g., 'gemini-2.5-flash')")
    prompt: str = Field(..., description="User prompt")
    system_instructions: str = Field(..., description="System instructions for the model")
    response_schema: Dict[str, Any] = Field(
        ...,
        description="Gemini responseSchema constraining the JSON shape (sent to the model, not validated locally)"
    )
    
    def to_payload(self) -> Dict[str, Any]:
        """Render the generateContent JSON body."""
        return {
            "contents": [{"parts": [{"text": self.prompt}]}],
            "systemInstruction": {"parts": [{"text": self.system_instructions}]},
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": self.response_schema,
            },
        }


class ContentPart(BaseModel):
    text: str = Field(..., min_length=1)


class CandidateContent(BaseModel):
    parts: list[ContentPart] = Field(..., min_length=1)


class Candidate(BaseModel):
    content: CandidateContent


class GenerateContentResponse(BaseModel):
    """
    Subset of the generateContent response envelope.
    
    Unknown fields (usageMetadata, finishReason, safetyRatings...) are ignored.
    """
    candidates: list[Candidate] = Field(..., min_length=1)
    
    @property
    def text(self) -> str:
        """Text of the first part of the first candidate."""
        return self.candidates[0].content.parts[0].text
