"""
Structured Logging with structlog

Provides structured, contextual logging for build orchestration.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars


def setup_logging(
    level: str = "INFO",
    format: str = "console",  # "json" or "console"
    include_timestamp: bool = True,
    cache_logger: bool = True,
) -> None:
    """
    Setup structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" for CI / machine consumption, "console" for a dev watch loop)
        include_timestamp: Include timestamp in logs
        cache_logger: Freeze loggers on first use (disable in tests that reconfigure)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    # Configure stdlib logging to play nice with structlog
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    shared_processors: list[Any] = [
        merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]

    if include_timestamp:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso"))

    shared_processors.append(structlog.processors.StackInfoRenderer())

    if format == "json":
        output_processors = [
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        output_processors = [
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    structlog.configure(
        processors=shared_processors + output_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=cache_logger,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__ from calling module)

    Returns:
        Structured logger instance

    Example:
        ```python
        logger = get_logger(__name__)
        logger.info("target_build_finished", target="app", modules=42)
        ```
    """
    return structlog.get_logger(name)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    message: str,
    error: BaseException | None = None,
    **extra: Any,
) -> None:
    """
    Log an error with consistent structure.

    Args:
        logger: Logger instance
        message: Error event name
        error: Exception object (type and message are extracted)
        **extra: Additional context
    """
    error_data = extra.copy()

    if error is not None:
        error_data.update(
            {
                "error_type": type(error).__name__,
                "error_message": str(error),
            }
        )

    logger.error(message, **error_data)


def log_performance(
    logger: structlog.stdlib.BoundLogger,
    operation: str,
    duration_ms: float,
    slow_threshold_ms: float = 1000.0,
    **extra: Any,
) -> None:
    """
    Log performance metrics in consistent format.

    Args:
        logger: Logger instance
        operation: Operation name
        duration_ms: Duration in milliseconds
        slow_threshold_ms: Above this, the event is logged as a warning
        **extra: Additional context (e.g., target, modules)
    """
    perf_data = {
        "operation": operation,
        "duration_ms": round(duration_ms, 2),
        **extra,
    }

    if duration_ms > slow_threshold_ms:
        perf_data["slow"] = True
        logger.warning("slow_operation", **perf_data)
    else:
        logger.info("operation_complete", **perf_data)
