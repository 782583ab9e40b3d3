"""JSON payload parsing with actionable error messages"""

from __future__ import annotations

import json
from typing import Any, Iterable, Optional

PREVIEW_LENGTH = 100


class PayloadError(ValueError):
    """Base class for payload parsing errors (never retryable)."""

    pass


class InvalidInputError(PayloadError):
    """Input is not a non-empty string."""

    pass


class EmptyInputError(PayloadError):
    """Input is blank after trimming."""

    pass


class MalformedPayloadError(PayloadError):
    """Input is not valid JSON."""

    pass


class MissingFieldsError(PayloadError):
    """Parsed object lacks required top-level fields."""

    def __init__(self, missing: list, present: list):
        self.missing = missing
        self.present = present
        super().__init__(
            f"Missing required fields: {', '.join(missing)}. "
            f"Got keys: {', '.join(present)}"
        )


def safe_json_parse(text: Any, required_fields: Optional[Iterable[str]] = None) -> Any:
    """Parse JSON text and check required top-level fields

    Args:
        text: JSON text (surrounding whitespace is ignored)
        required_fields: Keys that must be present in the top-level object

    Returns:
        Parsed value, unchanged

    Raises:
        PayloadError: Subclass describing why the payload was rejected
    """
    if not isinstance(text, str) or not text:
        raise InvalidInputError(
            f"Invalid JSON input: expected non-empty string, got {type(text).__name__}"
        )

    trimmed = text.strip()
    if not trimmed:
        raise EmptyInputError("Empty JSON string")

    try:
        parsed = json.loads(trimmed)
    except json.JSONDecodeError as e:
        preview = trimmed[:PREVIEW_LENGTH]
        suffix = "..." if len(trimmed) > PREVIEW_LENGTH else ""
        raise MalformedPayloadError(f"Invalid JSON: {e}\nPreview: {preview}{suffix}") from e

    if required_fields is not None:
        required = list(required_fields)
        present = list(parsed.keys()) if isinstance(parsed, dict) else []
        missing = [key for key in required if key not in present]
        if missing:
            raise MissingFieldsError(missing, present)

    return parsed
