"""
Common observability utilities.

This module re-exports observability functions from infra layer
to break circular dependencies. All layers can safely import from here.
"""

from multibuild.infra.observability import (
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
