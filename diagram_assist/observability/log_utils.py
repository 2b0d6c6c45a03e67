"""
Logging utilities for untrusted proposal payloads.

Generator output can be arbitrarily large or oddly typed, so values are
condensed before they reach a log line. Context is rendered into the message
as ``key=value`` pairs and also attached to the record as attributes.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions
"""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def safe_log_value(value: Any, max_length: int = 200) -> str:
    """
    Condense any value to a short, single-line string.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    try:
        if value is None:
            return "None"
        if isinstance(value, BaseModel):
            element_id = getattr(value, "id", None)
            text = f"{type(value).__name__}(id={element_id})" if element_id else type(value).__name__
        elif isinstance(value, str):
            text = value.replace("\n", "\\n")
        elif isinstance(value, (list, tuple, set, frozenset)):
            text = f"{type(value).__name__}({len(value)} items)"
        elif isinstance(value, Mapping):
            text = f"dict({len(value)} keys)"
        else:
            text = str(value)
    except Exception as e:
        return f"<unable to log: {type(e).__name__}>"

    if len(text) > max_length:
        return text[:max_length] + f"... (truncated, {len(text)} total)"
    return text


def describe_record(record: Any) -> str:
    """
    One-line summary of a raw proposal record.

    Args:
        record: Raw element record as received from the generator

    Returns:
        str: "kind=<...> id=<...> keys=[...]" style summary
    """
    if not isinstance(record, Mapping):
        return f"<{type(record).__name__}>"
    kind = record.get("element_type") or record.get("type")
    payload = record.get("element_data") or record.get("data")
    element_id = payload.get("id") if isinstance(payload, Mapping) else None
    return (
        f"kind={safe_log_value(kind)} id={safe_log_value(element_id or record.get('id'))} "
        f"keys={sorted(str(k) for k in record)}"
    )


def _render(message: str, context: dict[str, str]) -> str:
    if not context:
        return message
    pairs = " ".join(f"{key}={value}" for key, value in context.items())
    return f"{message} {pairs}"


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    **context,
) -> None:
    """
    Log a message followed by condensed ``key=value`` context.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, etc.)
        message: Log message
        **context: Context values, condensed with safe_log_value
    """
    if not logger.isEnabledFor(level):
        return
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    logger.log(level, _render(message, safe_context), extra=safe_context)


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context,
) -> None:
    """
    Log an exception at ERROR with its traceback and context.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context values
    """
    safe_context = {key: safe_log_value(val) for key, val in context.items()}
    safe_context["error_type"] = type(exc).__name__
    safe_context["error_msg"] = safe_log_value(str(exc))
    logger.error(_render(message, safe_context), exc_info=exc, extra=safe_context)
