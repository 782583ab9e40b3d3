"""LLM configuration model."""

from typing import Literal

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Configuration for LLM provider.
    
    Attributes:
        provider: LLM provider name
        model: Model identifier
        temperature: Sampling temperature (0.0-2.0)
        max_tokens: Maximum tokens in response
        timeout: HTTP request timeout in seconds
    """

    provider: Literal["mock", "gemini"] = "mock"
    model: str = "gemini-2.5-flash"
    temperature: float = Field(1.0, ge=0.0, le=2.0)
    max_tokens: int = Field(256, gt=0, le=100000)
    timeout: float = Field(30.0, gt=0.0)
