"""Phrase storage on SQLAlchemy Core.

Table layout (``frases``):
  id                uuid string, primary key
  texto             phrase message
  categoria         phrase category
  fecha_creacion    creation time
  fecha_ultimo_uso  last time the phrase was served (NULL = never)

Rotation serves the least recently used phrase, never-served phrases first.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from dailyphrase.domain.models.phrase import Phrase

logger = logging.getLogger(__name__)

metadata = sa.MetaData()

frases = sa.Table(
    "frases",
    metadata,
    sa.Column("id", sa.String(36), primary_key=True),
    sa.Column("texto", sa.Text, nullable=False),
    sa.Column("categoria", sa.String(64), nullable=False),
    sa.Column("fecha_creacion", sa.DateTime(timezone=True), nullable=False),
    sa.Column("fecha_ultimo_uso", sa.DateTime(timezone=True), nullable=True),
)


def create_db_engine(url: str, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy engine for the phrase database.

    Args:
        url: Database URL (e.g. sqlite:///dailyphrase.db, postgresql+psycopg://...)
        echo: Whether to log SQL statements
    """
    return sa.create_engine(url, echo=echo, pool_pre_ping=True)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class PhraseRepository:
    """Persists generated phrases and hands them out in rotation"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self) -> None:
        metadata.create_all(self.engine)
        logger.info("Phrase table ready")

    def insert(self, phrase: Phrase) -> str:
        """Store a new, never-served phrase

        Returns:
            Generated phrase id
        """
        phrase_id = str(uuid.uuid4())
        with self.engine.begin() as conn:
            conn.execute(
                frases.insert().values(
                    id=phrase_id,
                    texto=phrase.message,
                    categoria=phrase.category,
                    fecha_creacion=_now(),
                    fecha_ultimo_uso=None,
                )
            )
        logger.info(f"Stored phrase {phrase_id} ({phrase.category})")
        return phrase_id

    def next_for_rotation(self) -> Optional[Phrase]:
        """Pick the least recently served phrase and mark it as served now

        Returns:
            The selected phrase, or None when the table is empty
        """
        stmt = (
            sa.select(frases.c.id, frases.c.texto, frases.c.categoria)
            .order_by(
                frases.c.fecha_ultimo_uso.asc().nulls_first(),
                frases.c.fecha_creacion.asc(),
            )
            .limit(1)
        )
        with self.engine.begin() as conn:
            row = conn.execute(stmt).first()
            if row is None:
                logger.warning("No phrases available in storage")
                return None
            conn.execute(
                frases.update().where(frases.c.id == row.id).values(fecha_ultimo_uso=_now())
            )
        logger.debug(f"Selected phrase {row.id} for rotation")
        return Phrase(message=row.texto, category=row.categoria)

    def count(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(sa.select(sa.func.count()).select_from(frases)).scalar_one()
