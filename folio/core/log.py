"""folio.core.log

One handler, on the `folio` logger, on stderr.

Messages are snake_case event names; context travels in `extra=`.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from folio.core.config import LoggingConfig

ROOT_LOGGER = "folio"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime", "taskName"}


def _extras(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        body: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        body.update(_extras(record))
        if record.exc_info:
            body["exc"] = self.formatException(record.exc_info)
        return json.dumps(body, default=str, sort_keys=True)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname.lower():<7} {record.name}: {record.getMessage()}"
        extras = _extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in sorted(extras.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def configure_logging(cfg: LoggingConfig, *, stream: Any = None) -> logging.Logger:
    """Install a single handler on the `folio` logger. Safe to call repeatedly."""

    logger = logging.getLogger(ROOT_LOGGER)
    level = logging.getLevelName(cfg.level.upper())
    logger.setLevel(level if isinstance(level, int) else logging.INFO)

    for h in list(logger.handlers):
        if getattr(h, "_folio_handler", False):
            logger.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter() if cfg.json_output else TextFormatter())
    handler._folio_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
