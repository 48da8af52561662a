"""JSON-lines logging for the dashboard process."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from app.core.config import Config, get_config

# Attributes present on every LogRecord; anything else came in through `extra`.
_RESERVED_RECORD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

# Third-party loggers held at WARNING outside development.
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with `extra` fields (e.g. `event`) at the top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RESERVED_RECORD_FIELDS and key not in payload
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def _build_handlers(config: Config) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    formatter = JsonFormatter()
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure_logging(config: Config | None = None) -> None:
    """Install the JSON handlers on the root logger unless something already has."""
    config = config or get_config()
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, config.LOG_LEVEL, logging.INFO))
    for handler in _build_handlers(config):
        root.addHandler(handler)

    if config.is_production:
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
