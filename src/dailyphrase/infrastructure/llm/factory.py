"""Provider lookup by configured name"""

import logging
from typing import Any, Dict, Optional

from dailyphrase.infrastructure.llm.base import LLMProvider
from dailyphrase.infrastructure.llm.gemini import GeminiProvider
from dailyphrase.infrastructure.llm.mock import MockLLMProvider

logger = logging.getLogger(__name__)


class LLMProviderFactory:
    """Builds the phrase generation backend named in ``llm.provider``"""

    PROVIDERS = {
        "mock": MockLLMProvider,
        "gemini": GeminiProvider,
    }

    @classmethod
    def create(cls, provider_type: str, config: Optional[Dict[str, Any]] = None) -> LLMProvider:
        """Instantiate a provider; names are matched case-insensitively

        Raises:
            ValueError: If no provider is registered under the name
        """
        name = provider_type.lower()
        provider_class = cls.PROVIDERS.get(name)
        if provider_class is None:
            available = ", ".join(cls.PROVIDERS)
            raise ValueError(f"Unknown LLM provider: {provider_type}. Available providers: {available}")

        logger.info(f"Creating {name} provider")
        return provider_class(config or {})
