"""Logging setup for portalclient."""

from __future__ import annotations

import logging
import time
from typing import Any

import msgspec

ROOT_LOGGER = "portalclient"
CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _utc_timestamp() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


class JsonFormatter(logging.Formatter):
    """One JSON object per line, for log shipping."""

    extra_fields = ("api_error", "attempt", "delay", "status", "url", "method")

    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "timestamp": _utc_timestamp(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key in self.extra_fields:
            value = getattr(record, key, None)
            if value is not None:
                base[key] = value

        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)

        return msgspec.json.encode(base).decode()


class ConsoleFormatter(logging.Formatter):
    """Human-readable lines; API error records are appended as key=value pairs."""

    def __init__(self) -> None:
        super().__init__(CONSOLE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        api_error = getattr(record, "api_error", None)
        if isinstance(api_error, dict):
            details = " ".join(
                f"{k}={v}" for k, v in api_error.items() if v not in (None, "", {})
            )
            line = f"{line} [{details}]"
        return line


def configure_logging(level: str = "WARNING", json_output: bool = False) -> logging.Logger:
    """Install a single stream handler on the package logger."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter() if json_output else ConsoleFormatter())

    if logger.handlers:
        logger.handlers = []
    logger.addHandler(handler)
    return logger
