"""Interface shared by the phrase generation backends"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class LLMProvider(ABC):
    """Text generation backend asked for one JSON phrase per call"""

    def __init__(self, config: Dict[str, Any]):
        """Store and check provider settings

        Args:
            config: Settings from the ``llm`` config section (model,
                temperature, max_tokens, timeout) plus backend-specific keys

        Raises:
            ValueError: If a required setting is missing
        """
        self.config = config
        self._validate_config(config)

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Hook for backends with required settings, such as an API key"""

    @abstractmethod
    def generate(self, prompt: str, **kwargs) -> str:
        """Return the raw text answer for a phrase prompt

        The text is expected to hold a ``{"category", "message"}`` object;
        parsing happens in the generation job.

        Raises:
            GenerationServiceError: If the backend call fails
        """
