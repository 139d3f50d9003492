"""Structured JSON logging for docsmd.

Both transforms log a DEBUG trail of what they skipped or fell back on,
one JSON object per line::

    {"ts": "2025-07-01T12:00:00.123456+00:00", "level": "DEBUG",
     "logger": "docsmd.compiler", "message": "skipped token",
     "token_type": "footnotes", "index": 42}

Structured fields travel in ``extra={"extra_fields": {...}}``::

    log = get_logger("docsmd.renderer")
    log.debug("skipped unrecognised block",
              extra={"extra_fields": {"element_keys": ["tableOfContents"]}})

The library loggers sit at WARNING, so the trail costs nothing until a
caller lowers the level.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO


class StructuredFormatter(logging.Formatter):
    """Render a record as one line of JSON.

    Keys ``ts`` (UTC, ISO-8601, taken from the record's creation time),
    ``level``, ``logger`` and ``message`` are always present.  Entries of
    ``extra_fields`` are merged in at the top level; ``exception`` and
    ``stack_info`` are added when the record has them.  Values JSON cannot
    encode are written as their ``str()``.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(entry, default=str)


# Names get_logger has already attached a handler to.
_configured_loggers: set[str] = set()


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return logging.getLevelName(level.upper())
    return level


def get_logger(
    name: str = "docsmd",
    *,
    level: int | str = logging.WARNING,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Return the named logger, attaching a JSON handler on first use.

    Parameters
    ----------
    name:
        Logger name; modules use ``"docsmd.<area>"``.
    level:
        Level set on first use, as an int or a case-insensitive name.
    stream:
        Handler stream, ``sys.stderr`` by default.

    Later calls with the same *name* return the same logger unchanged:
    no second handler, and *level* and *stream* are ignored.  The logger
    does not propagate, so host applications' root handlers do not print
    every record twice.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False

    _configured_loggers.add(name)
    return logger
