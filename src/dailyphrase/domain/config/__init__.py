"""Configuration models with Pydantic validation."""

from dailyphrase.domain.config.app import AppConfig
from dailyphrase.domain.config.cache import CacheConfig
from dailyphrase.domain.config.database import DatabaseConfig
from dailyphrase.domain.config.llm import LLMConfig
from dailyphrase.domain.config.retry import RetryConfig

__all__ = [
    "AppConfig",
    "LLMConfig",
    "RetryConfig",
    "DatabaseConfig",
    "CacheConfig",
]
