"""
Observability Infrastructure

Structured logging for build orchestration.
"""

from .logging import (
    get_logger,
    log_error,
    log_performance,
    setup_logging,
)

__all__ = [
    "get_logger",
    "log_error",
    "log_performance",
    "setup_logging",
]
