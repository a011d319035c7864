"""Logging setup for the snip CLI.

Command output is printed directly; logs carry diagnostics and are quiet
(``WARNING``) unless ``--log-level`` asks for more. Every handler masks
credential fields passed through ``extra`` so a bearer token never reaches
a log line.
"""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from snip.config import mask_secret

LogFormat = Literal["text", "json"]
LogDestination = Literal["auto", "stdout", "stderr"]

DEFAULT_LOG_LEVEL = "WARNING"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_STANDARD_RECORD_KEYS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}
SECRET_FIELDS = frozenset({"token", "authorization"})


class JsonFormatter(logging.Formatter):
    """Render a record and its ``extra`` fields as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class SecretMaskingFilter(logging.Filter):
    """Mask credential ``extra`` fields in place before any handler formats them."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        for key in SECRET_FIELDS:
            value = record.__dict__.get(key)
            if isinstance(value, str):
                record.__dict__[key] = mask_secret(value.removeprefix("Bearer "))
        return True


@dataclass(slots=True)
class _LevelRangeFilter(logging.Filter):
    min_level: int | None = None
    max_level: int | None = None

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if self.min_level is not None and record.levelno < self.min_level:
            return False
        return self.max_level is None or record.levelno <= self.max_level


def configure_logging(
    *,
    level: str | int = DEFAULT_LOG_LEVEL,
    fmt: LogFormat = "text",
    destination: LogDestination = "auto",
) -> logging.Logger:
    """Replace the root logger's handlers according to the CLI options."""

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(_resolve_level(level))

    formatter = JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    for handler in _build_handlers(destination):
        handler.addFilter(SecretMaskingFilter())
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return root


def _resolve_level(value: str | int) -> int:
    if isinstance(value, int):
        return value
    resolved = logging.getLevelName(value.upper())
    if not isinstance(resolved, int):  # getLevelName echoes unknown names back
        raise ValueError(f"Unknown log level: {value}")
    return resolved


def _build_handlers(destination: LogDestination) -> Iterable[logging.Handler]:
    if destination == "stdout":
        return (logging.StreamHandler(sys.stdout),)
    if destination == "stderr":
        return (logging.StreamHandler(sys.stderr),)

    info_handler = logging.StreamHandler(sys.stdout)
    info_handler.addFilter(_LevelRangeFilter(max_level=logging.INFO))
    problem_handler = logging.StreamHandler(sys.stderr)
    problem_handler.addFilter(_LevelRangeFilter(min_level=logging.WARNING))
    return (info_handler, problem_handler)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_KEYS and not key.startswith("_")
    }


__all__ = [
    "DEFAULT_LOG_LEVEL",
    "JsonFormatter",
    "LogDestination",
    "LogFormat",
    "SecretMaskingFilter",
    "configure_logging",
]
