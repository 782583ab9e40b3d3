"""Phrase model - a positive phrase served to the front end"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class PhraseCategory(str, Enum):
    """Main feeling conveyed by a phrase"""

    AMOR = "Amor"
    FE = "Fe"
    ESPERANZA = "Esperanza"
    GRATITUD = "Gratitud"
    FUERZA = "Fuerza"


class PhraseValidationError(ValueError):
    """Phrase data is incomplete or has the wrong types."""

    pass


@dataclass(frozen=True)
class Phrase:
    """A generated phrase and its category"""

    message: str
    category: str  # Usually a PhraseCategory value, free text is accepted

    def __post_init__(self):
        """Validate phrase data"""
        if not isinstance(self.message, str) or not self.message.strip():
            raise PhraseValidationError("Phrase message must be a non-empty string")
        if not isinstance(self.category, str) or not self.category.strip():
            raise PhraseValidationError("Phrase category must be a non-empty string")

    @property
    def is_known_category(self) -> bool:
        return self.category in {c.value for c in PhraseCategory}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Phrase":
        """Build a phrase from a ``{"category", "message"}`` mapping"""
        return cls(message=data.get("message"), category=data.get("category"))

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "category": self.category}
