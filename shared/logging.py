"""
Structured logging for forecast request construction.

Sets up structlog with:
- JSON formatting when LOG_FORMAT=json, pretty console output otherwise
- Redaction of credentials (the API key is part of every forecast URL)
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.types import EventDict, Processor

from config import AppSettings

# Sensitive fields to redact from logs
REDACTED_FIELDS = {
    "api_key",
    "key",
    "secret",
    "token",
    "password",
    "url",
}

_SENSITIVE_FRAGMENTS = ("key", "secret", "token", "password")
_RESERVED = ("level", "event", "timestamp", "logger")


def get_logger(name: str) -> BoundLogger:
    """
    Get a configured logger instance.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("forecast_request_built", host="api.darksky.net")
    """
    return structlog.get_logger(name)


def redact_sensitive_fields(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Redact sensitive fields from logs."""
    for key in list(event_dict.keys()):
        if key in _RESERVED:
            continue
        lowered = key.lower()
        if lowered in REDACTED_FIELDS or any(
            fragment in lowered for fragment in _SENSITIVE_FRAGMENTS
        ):
            event_dict[key] = "***REDACTED***"
    return event_dict


def configure_structlog(log_format: str = "console") -> None:
    """
    Configure structlog with appropriate processors.

    json: machine-readable output for production
    console: pretty, coloured output for development
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        redact_sensitive_fields,
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=True,
            pad_event=15,
            sort_keys=False,
        )

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging(settings: Optional[AppSettings] = None) -> None:
    """
    Initialize logging for the process.

    Should be called once by the application embedding the builder; the
    builder itself only emits events.
    """
    settings = settings or AppSettings()
    log_level = settings.logging.log_level
    log_format = settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    configure_structlog(log_format)

    get_logger(__name__).info(
        "logging_initialized",
        env=settings.env,
        log_level=log_level,
        log_format=log_format,
    )
