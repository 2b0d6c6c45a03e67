"""Tests for the exception hierarchy."""

from diagram_assist.core.exceptions import (
    DiagramAssistException,
    ElementWarning,
    InvalidShapeError,
    RecoverableTransportError,
    ReferenceWarning,
    StructuralError,
    TerminalError,
)


def test_base_exception_str_includes_details():
    """Details are appended to the message when present."""
    exc = DiagramAssistException("failed", details={"step": "merge"})
    assert exc.message == "failed"
    assert str(exc) == "failed | Details: {'step': 'merge'}"
    assert str(DiagramAssistException("plain")) == "plain"


def test_structural_error_defaults_errors_to_message():
    """Without explicit errors, the message is the only error."""
    assert StructuralError("Elements must be an array").errors == ["Elements must be an array"]
    assert StructuralError("bad", errors=["a", "b"]).errors == ["a", "b"]


def test_element_warning_records_position():
    """Index and id end up in details."""
    exc = InvalidShapeError("bad label", index=2, element_id="s1")
    assert isinstance(exc, ElementWarning)
    assert exc.details == {"index": 2, "element_id": "s1"}


def test_reference_warning_message():
    """The orphan message names the connection and both endpoints."""
    exc = ReferenceWarning("c1", "a", "b")
    assert exc.message == "Orphaned connection removed: c1 (source: a, target: b)"
    assert exc.connection_id == "c1"


def test_transport_errors_carry_code():
    """Both transport-side errors expose a classification code."""
    assert RecoverableTransportError("slow", code="TIMEOUT").code == "TIMEOUT"
    assert TerminalError("nope").code == "UNKNOWN"
