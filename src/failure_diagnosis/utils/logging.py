"""Structured logging for failure-diagnosis.

Log entries are built by structlog and written through stdlib ``logging``.
Diagnosis input is raw test-runner output, so every entry passes through a
processor that strips terminal escapes and redacts credentials before it is
rendered.

Logs go to stderr (and optionally a file). stdout is reserved for the CLI's
JSON result.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from enum import StrEnum
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog

from failure_diagnosis.utils.security import SecretRedactor, sanitize_for_logging

SERVICE_NAME = "failure-diagnosis"


class LogFormat(StrEnum):
    """Log output format options."""

    JSON = "json"
    CONSOLE = "console"


class LogLevel(StrEnum):
    """Log level options."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@lru_cache(maxsize=1)
def _redactor() -> SecretRedactor:
    return SecretRedactor()


def sanitize_log_value(value: Any) -> Any:
    """Make a log value safe to emit.

    Strings lose ANSI escapes and control characters and have secrets
    redacted. Dicts, lists and tuples are sanitized element by element and
    keep their type. Anything else is returned unchanged.
    """
    if isinstance(value, str):
        return _redactor().redact(sanitize_for_logging(value))
    if isinstance(value, dict):
        return {key: sanitize_log_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_log_value(item) for item in value)
    return value


def redact_event(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor applying sanitize_log_value to every field."""
    for key, value in event_dict.items():
        event_dict[key] = sanitize_log_value(value)
    return event_dict


def add_service_info(
    logger: logging.Logger,
    method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Structlog processor tagging entries with the service name and version."""
    event_dict.setdefault("service", SERVICE_NAME)

    try:
        from failure_diagnosis._version import __version__
    except (ImportError, RuntimeError):
        return event_dict

    event_dict.setdefault("version", __version__)
    return event_dict


def _processors(log_format: LogFormat) -> list[Any]:
    renderer: Any
    if log_format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=False, exception_formatter=structlog.dev.plain_traceback
        )

    return [
        structlog.contextvars.merge_contextvars,
        add_service_info,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        redact_event,
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def _handlers(file_path: Path | None) -> list[logging.Handler]:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if file_path is None:
        return handlers

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path))
    except OSError as e:
        # stderr still works, so report and carry on
        print(f"failure-diagnosis: cannot open log file {file_path}: {e}", file=sys.stderr)

    return handlers


def configure_logging(
    level: LogLevel | str = LogLevel.WARNING,
    log_format: LogFormat | str = LogFormat.CONSOLE,
    file_path: Path | str | None = None,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        level: Minimum level to emit (case-insensitive when a string)
        log_format: "json" for log shippers, "console" for people
        file_path: Also append entries to this file; None disables file output

    Raises:
        ValueError: If level or log_format is not a known value

    Example:
        configure_logging(level="DEBUG")
        configure_logging(level="INFO", log_format="json", file_path="logs/diag.log")
    """
    level = LogLevel(level.upper()) if isinstance(level, str) else level
    log_format = LogFormat(log_format.lower()) if isinstance(log_format, str) else log_format
    numeric_level = logging.getLevelName(level.value)

    structlog.configure(
        processors=_processors(log_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers = _handlers(Path(file_path) if file_path is not None else None)
    for handler in handlers:
        handler.setLevel(numeric_level)

    logging.basicConfig(format="%(message)s", level=numeric_level, handlers=handlers, force=True)


@contextmanager
def diagnosis_context(**values: Any) -> Iterator[None]:
    """Bind values to every log entry emitted inside the block.

    Example:
        with diagnosis_context(source="stdin", file_path="tests/login.spec.ts"):
            engine.classify(message)
    """
    with structlog.contextvars.bound_contextvars(**values):
        yield
