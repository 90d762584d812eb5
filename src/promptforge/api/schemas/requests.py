"""API request schemas."""

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator

from ...core.config import get_settings
from ...core.types import Tone


def _check_length(value: Optional[str], field_name: str) -> Optional[str]:
    limit = get_settings().api.max_prompt_chars
    if value is not None and len(value) > limit:
        raise ValueError(f"{field_name} exceeds the {limit}-character limit")
    return value


class AnalyzeRequest(BaseModel):
    """Request for prompt analysis."""
    prompt: str = Field(..., description="The prompt to analyze")

    @field_validator("prompt")
    @classmethod
    def prompt_within_limit(cls, v: str) -> str:
        return _check_length(v, "prompt")


class EnhanceRequest(BaseModel):
    """Request for prompt enhancement."""
    prompt: str = Field(..., description="The prompt to enhance")
    platform_id: str = Field(..., description="Target platform id, e.g. claude-sonnet")
    tone: str = Field(
        "professional",
        description="Tone: professional, casual, academic, spartan, laconic, sarcastic"
    )
    few_shot_count: int = Field(0, ge=0, le=10, description="Few-shot examples to add")
    variation_count: int = Field(2, ge=1, le=5, description="Number of variations to generate")
    system_message: Optional[str] = Field(None, description="Optional system message")
    dataset_content: Optional[str] = Field(None, description="Optional reference data")

    @field_validator("prompt", "system_message", "dataset_content")
    @classmethod
    def text_within_limit(cls, v: Optional[str], info) -> Optional[str]:
        return _check_length(v, info.field_name)

    @field_validator("tone")
    @classmethod
    def known_tone(cls, v: str) -> str:
        value = v.strip().lower()
        valid = [t.value for t in Tone]
        if value not in valid:
            raise ValueError(f"Unknown tone: {v}. Valid options: {', '.join(valid)}")
        return value


class TokensRequest(BaseModel):
    """Request for token counting and cost estimation."""
    text: str = Field(..., description="Text to count")
    platform_id: Optional[str] = Field(None, description="Platform to price the tokens for")

    @field_validator("text")
    @classmethod
    def text_within_limit(cls, v: str) -> str:
        return _check_length(v, "text")


class CompareCostsRequest(BaseModel):
    """Request for a cost comparison across platforms."""
    text: str = Field(..., description="Text whose tokens are priced")
    platform_ids: Optional[List[str]] = Field(
        None,
        description="Platforms to compare (default: all)"
    )

    @field_validator("text")
    @classmethod
    def text_within_limit(cls, v: str) -> str:
        return _check_length(v, "text")
