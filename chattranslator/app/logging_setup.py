from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from chattranslator.app.config import app_paths

LOG_FILENAME = "chattranslator.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 5

# Attributes every LogRecord carries; anything else arrived through `extra`.
_BUILTIN_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}
_REDACTED = frozenset({"credentials", "api_key"})


def _extra_fields(record: logging.LogRecord) -> dict[str, object]:
    return {
        key: ("***" if key in _REDACTED else value)
        for key, value in vars(record).items()
        if key not in _BUILTIN_ATTRS and not key.startswith("_")
    }


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line; event fields passed via `extra` sit at top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_extra_fields(record),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_app_logger(name: str = "chattranslator", *, debug: bool = False) -> tuple[logging.Logger, Path]:
    """Route `name` to a rotating file next to the user config. Returns (logger, log_path)."""
    log_path = app_paths().config_dir / "logs" / LOG_FILENAME
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setFormatter(JsonLineFormatter(datefmt="%Y-%m-%dT%H:%M:%S"))

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)
    logger.propagate = False
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    return logger, log_path
