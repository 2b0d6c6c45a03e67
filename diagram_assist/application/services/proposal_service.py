"""Proposal service layer.

Applies generator proposals delivered by the collaboration transport to the
editor's diagram state. Decodes raw message text, runs the merge pipeline and
turns failures into classified, user-facing results.

Dependencies: logging, json, merge pipeline
System role: Service layer between the transport handler and the pipeline
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field

from diagram_assist.core.exceptions import RecoverableTransportError, TerminalError
from diagram_assist.core.merge_pipeline import DiagramMergePipeline, classify_error
from diagram_assist.core.merge_pipeline import extraction as rules
from diagram_assist.core.merge_pipeline.models import (
    DiagramState,
    ErrorCode,
    ProcessingError,
    ProcessingOutcome,
)
from diagram_assist.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ApplyResult(BaseModel):
    """What the editor needs after a proposal was applied (or not)."""

    outcome: ProcessingOutcome | None = Field(default=None, description="Pipeline outcome, if it ran")
    error: ProcessingError | None = Field(default=None, description="Classified failure")
    summary: str = Field(description="Feedback line shown to the user")

    @property
    def succeeded(self) -> bool:
        return self.outcome is not None and self.outcome.succeeded

    @property
    def state(self) -> DiagramState | None:
        return self.outcome.state if self.outcome else None


class ProposalService:
    """Service applying generator proposals to a diagram state.

    Stateless: the caller owns the diagram state and decides whether to adopt
    the returned one.
    """

    def __init__(self, pipeline: DiagramMergePipeline | None = None) -> None:
        """Initialize service with dependencies.

        Args:
            pipeline: Merge pipeline (default-configured when None)
        """
        self._pipeline = pipeline or DiagramMergePipeline()

    def apply(self, payload: Any, state: DiagramState) -> ApplyResult:
        """Apply one proposal to the given diagram state.

        Args:
            payload: Raw message text (str/bytes) or an already-decoded proposal
            state: Diagram state currently held by the editor

        Returns:
            ApplyResult: New state and stats, or a classified error
        """
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                return self.report_failure(e)
            except UnicodeDecodeError as e:
                return self.report_failure(
                    RecoverableTransportError(
                        f"Proposal payload is not valid text: {e.reason}",
                        code=ErrorCode.INVALID_JSON.value,
                        details={"encoding": e.encoding, "position": e.start},
                    )
                )

        outcome = self._pipeline.process(payload, state)

        if not outcome.succeeded:
            failure = TerminalError(
                "AI response validation failed. " + ", ".join(outcome.errors),
                code=ErrorCode.VALIDATION_ERROR.value,
            )
            error = classify_error(failure)
            logger.warning(f"{__name__}:apply - REJECTED {error.message}")
            return ApplyResult(outcome=outcome, error=error, summary=error.message)

        generated = self._count_records(payload)
        return ApplyResult(outcome=outcome, summary=self._summarize(generated, outcome))

    def report_failure(self, exc: BaseException) -> ApplyResult:
        """Classify a failure raised around the pipeline (timeouts, bad JSON).

        Args:
            exc: Exception raised while receiving or decoding a proposal

        Returns:
            ApplyResult: Result without outcome, carrying the classification
        """
        error = classify_error(exc)
        log_exception_with_context(
            logger,
            f"{__name__}:report_failure - {error.code.value}",
            exc,
            recoverable=error.recoverable,
        )
        summary = error.message
        if error.recoverable:
            summary += " You can try again."
        return ApplyResult(error=error, summary=summary)

    def _count_records(self, payload: Any) -> int:
        if isinstance(payload, (list, tuple)):
            return len(payload)
        if isinstance(payload, Mapping):
            records = rules.ELEMENT_LIST.extract(payload, default=[])
            if isinstance(records, (list, tuple)):
                return len(records)
        return 0

    def _summarize(self, generated: int, outcome: ProcessingOutcome) -> str:
        if generated == 0:
            return "The assistant generated no elements. Try rephrasing the command."

        stats = outcome.stats
        parts = [f"{generated} element(s) generated"]
        if stats.duplicates_removed:
            parts.append(f"{stats.duplicates_removed} duplicate(s) avoided")
        if stats.warnings:
            parts.append(f"{len(stats.warnings)} warning(s)")
        return " • ".join(parts) + ". Review and apply the changes."
