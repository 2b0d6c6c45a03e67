"""Tests for error classification."""

import json

import pytest
from pydantic import ValidationError

from diagram_assist.core.exceptions import (
    RecoverableTransportError,
    StructuralError,
    TerminalError,
)
from diagram_assist.core.merge_pipeline import classify_error
from diagram_assist.core.merge_pipeline.error_classifier import (
    INVALID_JSON_MESSAGE,
    TIMEOUT_MESSAGE,
    UNKNOWN_MESSAGE,
)
from diagram_assist.core.merge_pipeline.models import ErrorCode, Shape


class AbortError(Exception):
    """Stand-in for a client abort raised by an HTTP library."""


def _json_error() -> json.JSONDecodeError:
    try:
        json.loads("{not json")
    except json.JSONDecodeError as e:
        return e
    raise AssertionError("expected a decode error")


def _validation_error() -> ValidationError:
    try:
        Shape(id="s1", label="")
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


@pytest.mark.parametrize(
    "exc",
    [
        TimeoutError("read timed out"),
        AbortError("aborted"),
        RecoverableTransportError("slow upstream", code="TIMEOUT"),
    ],
)
def test_timeouts_are_recoverable(exc):
    """Timeouts and aborts map to TIMEOUT with a retry prompt."""
    error = classify_error(exc)
    assert error.code is ErrorCode.TIMEOUT
    assert error.message == TIMEOUT_MESSAGE
    assert error.recoverable is True


@pytest.mark.parametrize(
    "exc",
    [
        _json_error(),
        RecoverableTransportError("bad body", code="INVALID_JSON"),
        ValueError("Unexpected token in JSON at position 0"),
    ],
)
def test_invalid_json_is_recoverable(exc):
    """Malformed responses map to INVALID_JSON."""
    error = classify_error(exc)
    assert error.code is ErrorCode.INVALID_JSON
    assert error.message == INVALID_JSON_MESSAGE
    assert error.recoverable is True


@pytest.mark.parametrize(
    "exc,message",
    [
        (StructuralError("Missing elements field in response"), "Missing elements field in response"),
        (TerminalError("bad proposal", code="VALIDATION_ERROR"), "bad proposal"),
        (RuntimeError("Schema validation failed"), "Schema validation failed"),
    ],
)
def test_validation_errors_are_terminal(exc, message):
    """Validation failures keep their message and are not recoverable."""
    error = classify_error(exc)
    assert error.code is ErrorCode.VALIDATION_ERROR
    assert error.message == message
    assert error.recoverable is False


def test_pydantic_validation_error_is_terminal():
    """Model validation errors are classified as validation failures."""
    error = classify_error(_validation_error())
    assert error.code is ErrorCode.VALIDATION_ERROR
    assert error.recoverable is False


def test_unrecognised_transport_error_stays_recoverable():
    """Transport errors without a known code are UNKNOWN but retryable."""
    error = classify_error(RecoverableTransportError("connection reset"))
    assert error.code is ErrorCode.UNKNOWN
    assert error.message == "connection reset"
    assert error.recoverable is True


def test_anything_else_is_unknown_and_terminal():
    """Unrecognised exceptions are not retried."""
    error = classify_error(KeyError("boom"))
    assert error.code is ErrorCode.UNKNOWN
    assert error.recoverable is False


def test_empty_message_falls_back():
    """An exception without text gets the generic message."""
    assert classify_error(RuntimeError()).message == UNKNOWN_MESSAGE
