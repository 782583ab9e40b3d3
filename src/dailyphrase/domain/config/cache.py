"""Cache configuration model."""

from datetime import timedelta

from pydantic import BaseModel, Field


class CacheConfig(BaseModel):
    """Configuration for the in-memory phrase cache."""

    duration_hours: float = Field(24.0, gt=0.0)

    @property
    def duration(self) -> timedelta:
        return timedelta(hours=self.duration_hours)
