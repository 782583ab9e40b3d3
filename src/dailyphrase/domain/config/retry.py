"""Retry configuration model."""

from pydantic import BaseModel, Field


class RetryConfig(BaseModel):
    """Configuration for retry logic of the generation job.
    
    Attributes:
        max_attempts: Maximum number of attempts, including the first one
        initial_delay_ms: Delay before the first retry in milliseconds
        max_delay_ms: Maximum delay between retries in milliseconds
        backoff_multiplier: Exponential backoff multiplier
        jitter_factor: Random jitter factor [0.0-1.0)
    """

    max_attempts: int = Field(5, gt=0, le=10)
    initial_delay_ms: float = Field(1000, ge=0.0)  # Allow 0 for tests
    max_delay_ms: float = Field(10000, ge=0.0)
    backoff_multiplier: float = Field(2.0, gt=1.0, le=10.0)
    jitter_factor: float = Field(0.15, ge=0.0, lt=1.0)
