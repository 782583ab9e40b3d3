"""Phrase generation job - asks the LLM for a phrase and stores it"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from dailyphrase.domain.config.retry import RetryConfig
from dailyphrase.domain.models.phrase import Phrase, PhraseValidationError
from dailyphrase.domain.prompts.phrase_prompts import PhrasePromptBuilder
from dailyphrase.infrastructure.json_parser import PayloadError, safe_json_parse
from dailyphrase.infrastructure.llm.base import LLMProvider
from dailyphrase.infrastructure.retry import (
    RetryOptions,
    RetryResult,
    default_is_retryable_error,
    with_exponential_backoff,
)
from dailyphrase.infrastructure.storage.repository import PhraseRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["category", "message"]


def is_retryable_generation_error(error: BaseException) -> bool:
    """Rejected payloads are terminal even when their text mentions a status code"""
    if isinstance(error, (PayloadError, PhraseValidationError)):
        return False
    return default_is_retryable_error(error)


class PhraseGenerationJob:
    """Scheduled job refilling the phrase pool.

    Each run performs "generate -> parse -> persist" inside the backoff
    executor, so transient failures of the LLM API or the database are
    retried while malformed answers fail immediately.
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        repository: PhraseRepository,
        retry_config: Optional[RetryConfig] = None,
        custom_prompt: Optional[str] = None,
    ):
        """Initialize generation job

        Args:
            llm_provider: LLM provider instance
            repository: Phrase storage
            retry_config: Retry settings (job defaults if None)
            custom_prompt: Custom generation prompt template
        """
        self.llm_provider = llm_provider
        self.repository = repository
        self.retry_config = retry_config or RetryConfig()
        self.prompt = PhrasePromptBuilder(custom_prompt).build()

    def _log_retry(self, attempt: int, error: BaseException, next_delay_ms: int) -> None:
        logger.warning(
            f"Phrase generation failed (attempt {attempt}/{self.retry_config.max_attempts}): "
            f"{error}. Retrying in {next_delay_ms}ms",
            extra={"context": {"attempt": attempt, "next_delay_ms": next_delay_ms, "error": str(error)}},
        )

    async def _generate_and_store(self) -> Phrase:
        text = await asyncio.to_thread(self.llm_provider.generate, self.prompt)
        data = safe_json_parse(text, REQUIRED_FIELDS)
        phrase = Phrase.from_dict(data)
        await asyncio.to_thread(self.repository.insert, phrase)
        return phrase

    async def run(self) -> RetryResult[Phrase]:
        """Generate and store one phrase

        Returns:
            RetryResult with the stored phrase, or the last error
        """
        logger.info("Starting phrase generation")
        result = await with_exponential_backoff(
            self._generate_and_store,
            RetryOptions(
                is_retryable_error=is_retryable_generation_error,
                on_retry=self._log_retry,
                **self.retry_config.model_dump(),
            ),
        )
        context = {"attempts": result.attempts, "total_time_ms": result.total_time_ms}
        if result.success:
            logger.info(f"Phrase generated and stored: {result.data.message}", extra={"context": context})
        else:
            logger.error(f"Phrase generation failed: {result.error}", extra={"context": context})
        return result
