"""
Exception hierarchy for the diagram assistant.

Provides layered exception structure for merge pipeline and transport errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DiagramAssistException(Exception):
    """Base exception for all diagram assistant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging

        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class StructuralError(DiagramAssistException):
    """Raised when a proposal is not a usable element collection (fatal)."""

    def __init__(
        self,
        message: str,
        errors: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize structural error.

        Args:
            message: Error message
            errors: Human-readable error strings surfaced to the editor
            details: Additional context
        """
        self.errors = errors or [message]
        super().__init__(message, details)


class ElementWarning(DiagramAssistException):
    """Raised when a single proposed record is malformed and must be dropped."""

    def __init__(
        self,
        message: str,
        index: int | None = None,
        element_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize element warning.

        Args:
            message: Warning message
            index: Position of the record inside the proposal
            element_id: Identifier of the record, when one was found
            details: Additional context
        """
        details = details or {}
        if index is not None:
            details["index"] = index
        if element_id:
            details["element_id"] = element_id
        super().__init__(message, details)


class InvalidShapeError(ElementWarning):
    """Raised when a shape would be built with an empty or placeholder label."""

    pass


class ReferenceWarning(DiagramAssistException):
    """Raised when a connection references a shape missing from the merged state."""

    def __init__(
        self,
        connection_id: str,
        source: str,
        target: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize reference warning.

        Args:
            connection_id: ID of the orphaned connection
            source: Source shape identifier
            target: Target shape identifier
            details: Additional context
        """
        details = details or {}
        details.update({"source": source, "target": target})
        self.connection_id = connection_id
        super().__init__(
            f"Orphaned connection removed: {connection_id} "
            f"(source: {source}, target: {target})",
            details,
        )


class RecoverableTransportError(DiagramAssistException):
    """Raised for caller-side failures that a retry may fix (timeouts, bad JSON)."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize recoverable transport error.

        Args:
            message: Error message
            code: Classification code (TIMEOUT, INVALID_JSON)
            details: Additional context
        """
        self.code = code
        super().__init__(message, details)


class TerminalError(DiagramAssistException):
    """Raised for failures that retrying with the same proposal will not change."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize terminal error.

        Args:
            message: Error message
            code: Classification code (VALIDATION_ERROR, UNKNOWN)
            details: Additional context
        """
        self.code = code
        super().__init__(message, details)
