"""
Structured logging configuration using structlog.

Provides JSON-formatted logging with context processors for
timestamps and log levels. The client never configures logging on
import; applications call setup_logging() once at startup.
"""
import logging
import os
import sys
from typing import Any, Optional

import structlog


def setup_logging(level: str = "INFO", environment: Optional[str] = None) -> None:
    """
    Configure structlog for an application that uses the client.

    Only structlog is configured; the standard logging module is left to
    the host application.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            unknown names fall back to INFO
        environment: "development" selects the colored console renderer,
            anything else JSON (defaults to the ENVIRONMENT variable)
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    if environment is None:
        environment = os.getenv("ENVIRONMENT", "production")
    is_dev = environment == "development"

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    if is_dev:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ of calling module)

    Returns:
        Configured structlog logger instance

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("api_request", url="https://oauth.reddit.com/r/python/hot")
    """
    return structlog.get_logger(name)


def log_api_call(
    logger: Any,
    method: str,
    url: str,
    duration_ms: float,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
    **extra: Any,
) -> None:
    """
    Log a single outbound HTTP call in structured format.

    Args:
        logger: Bound logger to emit on
        method: HTTP method
        url: Request URL (never includes credentials)
        duration_ms: Round-trip time in milliseconds
        status_code: HTTP status, if a response was received
        error: Error message if the call failed
        **extra: Additional context to log

    Example:
        >>> log_api_call(logger, "GET", url, 123.4, status_code=200, bytes=5120)
    """
    log_data = {
        "method": method,
        "url": url,
        "duration_ms": round(duration_ms, 2),
        "status_code": status_code,
        **extra,
    }

    if error:
        logger.warning("api_call_failed", error=error, **log_data)
    else:
        logger.debug("api_call_completed", **log_data)
