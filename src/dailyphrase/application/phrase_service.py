"""Phrase service - serves the phrase of the day"""

from __future__ import annotations

import logging
from typing import Optional

from dailyphrase.domain.models.phrase import Phrase
from dailyphrase.infrastructure.cache import CacheInfo, EphemeralCache
from dailyphrase.infrastructure.storage.repository import PhraseRepository

logger = logging.getLogger(__name__)


class PhraseService:
    """Returns the current phrase, consulting the cache before storage"""

    def __init__(self, repository: PhraseRepository, cache: EphemeralCache[Phrase]):
        """Initialize phrase service

        Args:
            repository: Phrase storage
            cache: Process-wide cache shared by all handlers
        """
        self.repository = repository
        self.cache = cache

    def get_daily_phrase(self) -> Optional[Phrase]:
        """Get the phrase of the day

        Returns:
            Cached phrase if still fresh, otherwise the next phrase in
            rotation; None when storage holds no phrases
        """
        cached = self.cache.get()
        if cached is not None:
            return cached

        phrase = self.repository.next_for_rotation()
        if phrase is not None:
            self.cache.set(phrase)
        return phrase

    def cache_info(self) -> CacheInfo:
        return self.cache.info()
