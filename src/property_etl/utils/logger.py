"""
Logging Configuration

Structured logging setup using structlog. Pipeline runs bind the source name
through contextvars so every event emitted during a run carries it.
"""
import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from config.settings import settings

APP_NAME = "property_etl"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add application context to all log entries.
    """
    event_dict["app"] = APP_NAME
    event_dict["environment"] = settings.environment
    return event_dict


def setup_logging(log_level: str = None, log_format: str = None) -> structlog.BoundLogger:
    """
    Configure structured logging for the application.

    Args:
        log_level: Override settings.log_level
        log_format: Override settings.log_format ("json" or "console")

    Returns:
        Configured structlog logger instance
    """
    level_name = (log_level or settings.log_level).upper()
    renderer_format = log_format or settings.log_format

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level_name, logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if renderer_format == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.processors.ExceptionRenderer())
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def bind_run_context(**values: Any) -> None:
    """Bind key/values to every log event emitted in the current context."""
    structlog.contextvars.bind_contextvars(**values)


def clear_run_context(*keys: str) -> None:
    """Remove previously bound run context keys."""
    structlog.contextvars.unbind_contextvars(*keys)
