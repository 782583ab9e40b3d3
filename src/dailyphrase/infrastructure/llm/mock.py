"""Mock LLM provider for testing and local development"""

import json
import random
import time
from typing import Any, Dict

from dailyphrase.infrastructure.http_client import GenerationServiceError
from dailyphrase.infrastructure.llm.base import LLMProvider

MOCK_PHRASES = [
    {"category": "Fuerza", "message": "Tu luz interior puede guiar al universo entero; ¡brilla hoy con esa fuerza!"},
    {"category": "Esperanza", "message": "Cada amanecer te recuerda que siempre hay un nuevo comienzo."},
    {"category": "Gratitud", "message": "Gracias por existir; el mundo es más amable contigo en él."},
    {"category": "Amor", "message": "Eres amado más de lo que imaginas, hoy y siempre."},
    {"category": "Fe", "message": "Confía: lo que siembras con el corazón florecerá a su tiempo."},
]


class MockLLMProvider(LLMProvider):
    """Mock LLM provider that returns canned phrases"""

    def __init__(self, config: Dict[str, Any] = None):
        """Initialize mock provider
        
        Args:
            config: Optional configuration with:
                - delay: Simulated API delay in seconds (default: 0.0)
                - responses: Dict mapping prompts to responses
                - failures: Error messages raised, one per call, before succeeding
        """
        if config is None:
            config = {}
        super().__init__(config)
        self.delay = config.get("delay", 0.0)
        self.responses = config.get("responses", {})
        self.failures = list(config.get("failures", []))
        self.calls = 0

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate mock provider configuration"""
        if "delay" in config and not isinstance(config["delay"], (int, float)):
            raise ValueError("delay must be a number")
        if "delay" in config and config["delay"] < 0:
            raise ValueError("delay must be non-negative")

    def generate(self, prompt: str, **kwargs) -> str:
        """Generate mock response
        
        Args:
            prompt: Input prompt (used to lookup predefined response)
            **kwargs: Ignored for mock provider
            
        Returns:
            JSON phrase text
        """
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)

        if self.failures:
            raise GenerationServiceError(self.failures.pop(0))

        if prompt in self.responses:
            return self.responses[prompt]

        return json.dumps(random.choice(MOCK_PHRASES), ensure_ascii=False)
