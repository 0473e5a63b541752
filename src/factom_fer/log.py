"""
Structured logging for factom-fer.

structlog is layered over the stdlib ``logging`` package. Library modules only
ask for a logger; the CLI calls :func:`setup_logging` once at start.

Environment
-----------
- FACTOM_FER_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING)
- FACTOM_FER_LOG_FORMAT: "console" (default) or "json"
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog

REDACT_KEYS = {
    "payment_private_key",
    "signing_private_key",
    "private_key",
    "seed",
    "secret",
}


def _redact_secrets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for k in list(event_dict.keys()):
        if k.lower() in REDACT_KEYS and event_dict[k] is not None:
            event_dict[k] = "***"
    return event_dict


def setup_logging(*, level: str | int | None = None, log_format: str | None = None) -> None:
    """Configure structlog + stdlib logging. Logs go to stderr so stdout stays clean."""
    level = level or os.getenv("FACTOM_FER_LOG_LEVEL", "").upper() or "WARNING"
    log_format = (log_format or os.getenv("FACTOM_FER_LOG_FORMAT") or "console").lower()
    if isinstance(level, str):
        level = logging.getLevelName(level)
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(level=level, stream=sys.stderr, format="%(message)s", force=True)

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            _redact_secrets,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    if not structlog.is_configured():
        # Route through stdlib logging until setup_logging() runs, so library
        # use stays silent below WARNING.
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_log_level,
                _redact_secrets,
                structlog.processors.KeyValueRenderer(key_order=["event"]),
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
    return structlog.get_logger(name)
