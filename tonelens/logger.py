"""
Structured logging for the tonelens API and UI, built on structlog.

Development gets colored console output; every other environment gets one
JSON object per line.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict

from .settings import Settings

SERVICE_NAME = "tonelens"

SENSITIVE_KEYS = {"apikey", "api_key", "token", "secret", "auth", "authorization", "password"}


def add_service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["service"] = SERVICE_NAME
    return event_dict


def filter_sensitive_data(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credentials that end up in log fields"""

    def mask(key: Any, value: Any) -> Any:
        if isinstance(key, str) and any(s in key.lower() for s in SENSITIVE_KEYS):
            return "[REDACTED]"
        if isinstance(value, dict):
            return {k: mask(k, v) for k, v in value.items()}
        return value

    return {k: mask(k, v) for k, v in event_dict.items()}


def configure_logging(settings: Settings) -> None:
    """Configure structlog and stdlib logging for the process"""
    processors = [
        structlog.contextvars.merge_contextvars,
        add_service_context,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        filter_sensitive_data,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if settings.ENVIRONMENT == "development":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
