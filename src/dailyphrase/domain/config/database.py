"""Database configuration model."""

from pydantic import BaseModel


class DatabaseConfig(BaseModel):
    """Configuration for phrase storage.

    Attributes:
        url: SQLAlchemy database URL
        echo: Whether to log SQL statements
    """

    url: str = "sqlite:///dailyphrase.db"
    echo: bool = False
