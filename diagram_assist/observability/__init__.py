"""
Observability module.

Provides logging configuration and safe structured logging helpers.
"""

from diagram_assist.observability.log_utils import (
    describe_record,
    log_exception_with_context,
    log_with_context,
    safe_log_value,
)
from diagram_assist.observability.logger import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "describe_record",
    "log_exception_with_context",
    "log_with_context",
    "safe_log_value",
]
