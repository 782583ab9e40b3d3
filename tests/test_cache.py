"""Tests for the single-slot in-memory cache"""

import threading
import time
from datetime import timedelta

import pytest

from dailyphrase.domain.models.phrase import Phrase
from dailyphrase.infrastructure.cache import CacheInfo, EphemeralCache

DAY_SECONDS = 24 * 60 * 60


class FakeClock:
    """Manually advanced clock (seconds)"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return EphemeralCache(clock=clock)


@pytest.fixture
def sample_phrase():
    return Phrase(message="Tu luz interior guía el camino", category="Fuerza")


def test_get_returns_none_when_empty(cache):
    cache.clear()
    assert cache.get() is None


def test_set_then_get_returns_value(cache, sample_phrase):
    cache.set(sample_phrase)
    assert cache.get() == sample_phrase
    # reads are non-destructive
    assert cache.get() == sample_phrase


def test_clear_empties_cache(cache, sample_phrase):
    cache.set(sample_phrase)
    cache.clear()
    assert cache.get() is None
    assert cache.info() == CacheInfo(cached=False)


def test_set_overwrites_previous_entry(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(3600)
    newer = Phrase(message="Cada día es un regalo", category="Gratitud")
    cache.set(newer)

    assert cache.get() == newer
    assert cache.info().age_in_minutes == 0


def test_entry_fresh_at_exactly_24_hours(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(DAY_SECONDS)
    assert cache.get() == sample_phrase


def test_expired_entry_is_evicted_on_get(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(DAY_SECONDS + 0.001)

    assert cache.get() is None
    assert cache.info().cached is False


def test_info_does_not_evict_expired_entry(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(DAY_SECONDS + 60)

    info = cache.info()
    assert info.cached is True
    assert info.age_in_minutes == 24 * 60 + 1
    # still present until the next get()
    assert cache.info().cached is True
    assert cache.get() is None
    assert cache.info().cached is False


def test_info_when_empty(cache):
    info = cache.info()
    assert info.cached is False
    assert info.age_in_minutes is None


def test_info_age_in_whole_minutes(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(119)
    assert cache.info().age_in_minutes == 1


def test_info_age_never_negative(cache, clock, sample_phrase):
    cache.set(sample_phrase)
    clock.advance(-30)
    assert cache.info().age_in_minutes == 0


def test_info_age_non_decreasing_with_real_time(sample_phrase):
    cache = EphemeralCache()
    cache.set(sample_phrase)
    first = cache.info()
    time.sleep(0.1)
    second = cache.info()

    assert first.cached and second.cached
    assert second.age_in_minutes >= first.age_in_minutes >= 0


def test_custom_duration(clock, sample_phrase):
    cache = EphemeralCache(duration=timedelta(minutes=5), clock=clock)
    cache.set(sample_phrase)
    clock.advance(5 * 60 + 1)
    assert cache.get() is None


def test_wall_clock_jumps_do_not_change_age(monkeypatch, sample_phrase):
    cache = EphemeralCache()
    wall = {"now": time.time()}
    monkeypatch.setattr(time, "time", lambda: wall["now"])

    cache.set(sample_phrase)
    wall["now"] += 2 * DAY_SECONDS
    assert cache.get() == sample_phrase
    wall["now"] -= 4 * DAY_SECONDS
    assert cache.info() == CacheInfo(cached=True, age_in_minutes=0)


def test_concurrent_writers_leave_one_entry(sample_phrase):
    cache = EphemeralCache()
    values = [Phrase(message=f"Frase {i}", category="Fe") for i in range(20)]

    threads = [threading.Thread(target=cache.set, args=(value,)) for value in values]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.get() in values
    assert cache.info().cached is True
