"""
Error classification for failures around the merge pipeline.

Timeouts and malformed JSON come from the transport and are worth a retry
prompt. Validation failures are not: the same proposal fails the same way.

Dependencies: pydantic, core.exceptions
System role: Maps exceptions to user-facing ProcessingError values
"""

import json

from pydantic import ValidationError

from diagram_assist.core.exceptions import RecoverableTransportError, StructuralError

from .models import ErrorCode, ProcessingError

TIMEOUT_MESSAGE = "Generator response timed out. Please try again."
INVALID_JSON_MESSAGE = "Generator returned an invalid response format."
UNKNOWN_MESSAGE = "An unexpected error occurred."


def _is_timeout(exc: BaseException) -> bool:
    if isinstance(exc, TimeoutError):
        return True
    if type(exc).__name__ == "AbortError":
        return True
    return getattr(exc, "code", None) == ErrorCode.TIMEOUT.value


def _is_invalid_json(exc: BaseException) -> bool:
    if isinstance(exc, json.JSONDecodeError):
        return True
    if getattr(exc, "code", None) == ErrorCode.INVALID_JSON.value:
        return True
    return "JSON" in str(exc)


def _is_validation(exc: BaseException) -> bool:
    if isinstance(exc, (StructuralError, ValidationError)):
        return True
    if getattr(exc, "code", None) == ErrorCode.VALIDATION_ERROR.value:
        return True
    return "validation" in str(exc).lower()


def _message(exc: BaseException) -> str:
    return getattr(exc, "message", None) or str(exc)


def classify_error(exc: BaseException) -> ProcessingError:
    """
    Classify an exception raised while fetching or applying a proposal.

    Args:
        exc: The exception to classify

    Returns:
        ProcessingError: Code, user-facing message and recoverability
    """
    if _is_timeout(exc):
        return ProcessingError(code=ErrorCode.TIMEOUT, message=TIMEOUT_MESSAGE, recoverable=True)

    if _is_invalid_json(exc):
        return ProcessingError(
            code=ErrorCode.INVALID_JSON, message=INVALID_JSON_MESSAGE, recoverable=True
        )

    if _is_validation(exc):
        return ProcessingError(
            code=ErrorCode.VALIDATION_ERROR, message=_message(exc), recoverable=False
        )

    if isinstance(exc, RecoverableTransportError):
        return ProcessingError(
            code=ErrorCode.UNKNOWN, message=_message(exc) or UNKNOWN_MESSAGE, recoverable=True
        )

    # TerminalError and anything unrecognised
    return ProcessingError(
        code=ErrorCode.UNKNOWN, message=_message(exc) or UNKNOWN_MESSAGE, recoverable=False
    )
