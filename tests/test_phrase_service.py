"""Tests for PhraseService"""

from unittest.mock import MagicMock

import pytest

from dailyphrase.application.phrase_service import PhraseService
from dailyphrase.domain.models.phrase import Phrase
from dailyphrase.infrastructure.cache import EphemeralCache
from dailyphrase.infrastructure.storage.repository import PhraseRepository


@pytest.fixture
def phrase():
    return Phrase(message="Hoy es tu día", category="Esperanza")


@pytest.fixture
def repository(phrase):
    repo = MagicMock(spec=PhraseRepository)
    repo.next_for_rotation.return_value = phrase
    return repo


def test_cache_miss_queries_storage_and_populates_cache(repository, phrase):
    cache = EphemeralCache()
    service = PhraseService(repository, cache)

    assert service.get_daily_phrase() == phrase
    repository.next_for_rotation.assert_called_once()
    assert cache.get() == phrase
    assert service.cache_info().cached is True


def test_cache_hit_skips_storage(repository, phrase):
    cache = EphemeralCache()
    service = PhraseService(repository, cache)

    service.get_daily_phrase()
    service.get_daily_phrase()
    service.get_daily_phrase()

    repository.next_for_rotation.assert_called_once()


def test_expired_cache_rotates_to_next_phrase(repository, phrase):
    now = {"t": 1000.0}
    cache = EphemeralCache(clock=lambda: now["t"])
    service = PhraseService(repository, cache)
    service.get_daily_phrase()

    tomorrow = Phrase(message="Mañana brillarás", category="Fuerza")
    repository.next_for_rotation.return_value = tomorrow
    now["t"] += 24 * 60 * 60 + 1

    assert service.get_daily_phrase() == tomorrow
    assert repository.next_for_rotation.call_count == 2


def test_empty_storage_is_not_cached(repository):
    repository.next_for_rotation.return_value = None
    cache = EphemeralCache()
    service = PhraseService(repository, cache)

    assert service.get_daily_phrase() is None
    assert cache.info().cached is False


def test_storage_errors_propagate(repository):
    repository.next_for_rotation.side_effect = RuntimeError("connection lost")
    service = PhraseService(repository, EphemeralCache())

    with pytest.raises(RuntimeError, match="connection lost"):
        service.get_daily_phrase()
