"""Structured JSON log formatting"""

import json
import logging
from datetime import datetime, timezone


class JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line.

    Structured fields are read from the ``context`` extra::

        logger.info("Phrase stored", extra={"context": {"attempts": 2}})
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)
