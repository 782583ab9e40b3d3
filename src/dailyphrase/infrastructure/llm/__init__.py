"""LLM providers"""

from dailyphrase.infrastructure.llm.base import LLMProvider
from dailyphrase.infrastructure.llm.gemini import GeminiProvider
from dailyphrase.infrastructure.llm.mock import MockLLMProvider

__all__ = ["LLMProvider", "GeminiProvider", "MockLLMProvider"]
