"""Single-slot in-memory cache with a fixed freshness window.

The cache is per process: with several instances each one keeps its own
copy and stale reads across instances are expected.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_CACHE_DURATION = timedelta(hours=24)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value and the clock reading (seconds) taken when it was written"""

    data: T
    timestamp: float


@dataclass(frozen=True)
class CacheInfo:
    """Inspection snapshot of the cache slot"""

    cached: bool
    age_in_minutes: Optional[int] = None


class EphemeralCache(Generic[T]):
    """Holds at most one value; expired entries are evicted lazily on ``get``."""

    def __init__(
        self,
        duration: timedelta = DEFAULT_CACHE_DURATION,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize cache

        Args:
            duration: Freshness window of a cached value
            clock: Monotonic source of the current time in seconds
        """
        self.duration = duration
        self._clock = clock
        self._entry: Optional[CacheEntry[T]] = None
        self._lock = threading.Lock()

    def _age_seconds(self, entry: CacheEntry[T]) -> float:
        return max(0.0, self._clock() - entry.timestamp)

    def get(self) -> Optional[T]:
        """Return the cached value, or None if empty or expired"""
        with self._lock:
            entry = self._entry
            if entry is None:
                logger.debug("Cache empty")
                return None

            age = self._age_seconds(entry)
            age_in_minutes = int(age // 60)
            if age > self.duration.total_seconds():
                logger.info(f"Cached value expired after {age_in_minutes} minutes, clearing")
                self._entry = None
                return None

            logger.debug(f"Returning cached value (age: {age_in_minutes} minutes)")
            return entry.data

    def set(self, value: T) -> None:
        """Store a value, replacing any previous entry"""
        with self._lock:
            self._entry = CacheEntry(data=value, timestamp=self._clock())
        expires_at = datetime.now(timezone.utc) + self.duration
        logger.info(f"Value cached until {expires_at.isoformat()}")

    def clear(self) -> None:
        """Drop the cached entry, if any"""
        with self._lock:
            self._entry = None
        logger.info("Cache cleared")

    def info(self) -> CacheInfo:
        """Report whether an entry is present and its age.

        Unlike ``get``, this never evicts an expired entry.
        """
        with self._lock:
            entry = self._entry
            if entry is None:
                return CacheInfo(cached=False)
            return CacheInfo(cached=True, age_in_minutes=int(self._age_seconds(entry) // 60))
