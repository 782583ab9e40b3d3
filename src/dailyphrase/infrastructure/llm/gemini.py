"""Google Gemini provider using the Generative Language REST API."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from dailyphrase.infrastructure.http_client import GenerationServiceError, post_json
from dailyphrase.infrastructure.llm.base import LLMProvider

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
GEMINI_API_KEY_ENV = "GEMINI_API_KEY"


class GeminiProvider(LLMProvider):
    """Gemini provider requesting JSON output (``responseMimeType``)."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        if config is None:
            config = {}
        super().__init__(config)

        self.api_key = config.get("api_key") or os.getenv(GEMINI_API_KEY_ENV)
        self.model = config.get("model", "gemini-2.5-flash")
        self.temperature = config.get("temperature", 1.0)
        self.max_tokens = config.get("max_tokens", 256)
        self.timeout = float(config.get("timeout", 30))

    def _validate_config(self, config: Dict[str, Any]) -> None:
        if not (config.get("api_key") or os.getenv(GEMINI_API_KEY_ENV)):
            raise ValueError(
                "API key is required. "
                f"Set {GEMINI_API_KEY_ENV} environment variable or provide api_key in config."
            )

        if "model" in config and not isinstance(config["model"], str):
            raise ValueError("model must be a string")

        if "temperature" in config:
            temp = config["temperature"]
            if not isinstance(temp, (int, float)) or not (0.0 <= temp <= 2.0):
                raise ValueError("temperature must be between 0.0 and 2.0")

        if "max_tokens" in config:
            max_tok = config["max_tokens"]
            if not isinstance(max_tok, int) or max_tok < 1:
                raise ValueError("max_tokens must be a positive integer")

    def generate(self, prompt: str, **kwargs) -> str:
        model = kwargs.get("model", self.model)
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": kwargs.get("temperature", self.temperature),
                "maxOutputTokens": kwargs.get("max_tokens", self.max_tokens),
            },
        }
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        data = post_json(
            GEMINI_API_URL.format(model=model), payload=payload, headers=headers, timeout=self.timeout
        )

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError) as e:
            raise GenerationServiceError(f"Unexpected Gemini response shape: {e}") from e

        if not text:
            logger.error("Gemini API did not return text content")
            raise GenerationServiceError("Gemini API returned an empty response")
        return text
