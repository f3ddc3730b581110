"""structlog setup for the GroupMe client, with access tokens masked in every event."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from groupme_bot.config import ClientConfig

# Event keys whose values must never reach a log sink
SECRET_KEYS = frozenset({"token", "access_token", "x-access-token"})
REDACTED = "***"


def redact_secrets(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask credential values, including inside a logged ``params`` mapping."""
    for key, value in event_dict.items():
        if key.lower() in SECRET_KEYS:
            event_dict[key] = REDACTED
        elif isinstance(value, dict):
            event_dict[key] = {k: REDACTED if str(k).lower() in SECRET_KEYS else v for k, v in value.items()}
    return event_dict


def setup_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog; console rendering on stderr unless ``json_output`` is set."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_secrets,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_config(config: ClientConfig, json_output: bool = False) -> None:
    setup_logging(config.log_level, json_output=json_output)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
