"""
Diagram merge pipeline orchestrator.

Coordinates sanitization, deduplication, merge, reference checking and
placement. Purely sequential and synchronous: each stage sees the full output
of the previous one, and nothing is retried internally.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time
from collections.abc import Mapping
from typing import Any

from diagram_assist.core.exceptions import StructuralError
from diagram_assist.observability.log_utils import log_with_context

from . import extraction as rules
from .configs import MergePipelineSettings, get_pipeline_settings
from .error_classifier import classify_error
from .models import DiagramState, PipelineStage, ProcessingOutcome, ProcessingStats
from .tasks import (
    DeduplicationTask,
    MergeTask,
    PlacementTask,
    ReferenceIntegrityTask,
    SanitizationTask,
)

logger = logging.getLogger(__name__)


class DiagramMergePipeline:
    """Orchestrate proposal processing: sanitize -> dedupe -> merge -> check -> place."""

    def __init__(self, settings: MergePipelineSettings | None = None) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            settings: Pipeline settings (uses defaults if None)
        """
        self._settings = settings or get_pipeline_settings()

        self._sanitization_task = SanitizationTask(self._settings)
        self._deduplication_task = DeduplicationTask()
        self._merge_task = MergeTask()
        self._reference_integrity_task = ReferenceIntegrityTask()
        self._placement_task = PlacementTask(self._settings)

    def validate_structure(self, response: Any) -> list[Any]:
        """
        Check that a proposal is a usable element collection.

        A bare list is taken as the element list itself.

        Args:
            response: Raw proposal

        Returns:
            list[Any]: The raw element records

        Raises:
            StructuralError: Proposal absent, not a collection, or too large
        """
        if response is None:
            raise StructuralError("Response is null or undefined")

        if isinstance(response, (list, tuple)):
            records = response
        elif isinstance(response, Mapping):
            if not rules.ELEMENT_LIST.is_declared(response):
                raise StructuralError("Missing elements field in response")
            records = rules.ELEMENT_LIST.extract(response, default=[])
        else:
            raise StructuralError(
                f"Response must be a mapping or a list, got {type(response).__name__}"
            )

        if not isinstance(records, (list, tuple)):
            raise StructuralError("Elements must be an array")

        if len(records) > self._settings.max_elements:
            raise StructuralError(
                f"Response has {len(records)} elements, "
                f"limit is {self._settings.max_elements}",
                details={"element_count": len(records)},
            )

        return list(records)

    def process(self, response: Any, current: DiagramState) -> ProcessingOutcome:
        """
        Process one proposal against the current diagram state.

        Never raises: structural failures come back as a rejected outcome,
        everything else as warnings in the statistics.

        Args:
            response: Raw, untrusted proposal from the generator
            current: Diagram state held by the editor (not modified)

        Returns:
            ProcessingOutcome: Done with new state and stats, or Rejected
        """
        start_time = time.perf_counter()
        stages = [PipelineStage.VALIDATING]

        logger.info(
            f"{__name__}:process - START shapes={len(current.shapes)} "
            f"connections={len(current.connections)}"
        )

        try:
            records = self.validate_structure(response)
        except StructuralError as e:
            stages.append(PipelineStage.REJECTED)
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:process - REJECTED",
                reason=e.message,
                response=response,
            )
            return ProcessingOutcome(
                stage=PipelineStage.REJECTED,
                stats=ProcessingStats(warnings=list(e.errors), processing_time_ms=elapsed_ms),
                errors=list(e.errors),
                error=classify_error(e),
                stages=stages,
            )

        stages.append(PipelineStage.CLEANING)
        sanitized = self._sanitization_task.sanitize(records)

        stages.append(PipelineStage.DEDUPLICATING)
        deduplicated = self._deduplication_task.deduplicate(
            sanitized.shapes, sanitized.connections
        )
        warnings = sanitized.warnings + deduplicated.warnings

        stages.append(PipelineStage.MERGING)
        if not deduplicated.shapes and not deduplicated.connections:
            # Nothing to merge: the editor's state goes back untouched
            logger.debug(f"{__name__}:process - nothing to merge")
            stages.extend([PipelineStage.CHECKING_REFERENCES, PipelineStage.PLACING_POSITIONS])
            stats = ProcessingStats(
                duplicates_removed=deduplicated.duplicates,
                warnings=warnings,
            )
            return self._done(current, stats, stages, start_time)

        merged = self._merge_task.merge(
            current, deduplicated.shapes, deduplicated.connections
        )

        stages.append(PipelineStage.CHECKING_REFERENCES)
        checked = self._reference_integrity_task.check(merged.state)
        warnings.extend(checked.warnings)

        stages.append(PipelineStage.PLACING_POSITIONS)
        placed = self._placement_task.place(checked.state)

        existing_connection_ids = current.connection_ids()
        stats = ProcessingStats(
            shapes_added=merged.shapes_added,
            shapes_updated=merged.shapes_updated,
            connections_added=sum(
                1
                for connection in placed.state.connections
                if connection.id not in existing_connection_ids
            ),
            duplicates_removed=deduplicated.duplicates,
            connections_removed=len(checked.removed),
            warnings=warnings,
        )
        return self._done(placed.state, stats, stages, start_time)

    def _done(
        self,
        state: DiagramState,
        stats: ProcessingStats,
        stages: list[PipelineStage],
        start_time: float,
    ) -> ProcessingOutcome:
        stages.append(PipelineStage.DONE)
        stats.processing_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"{__name__}:process - COMPLETE shapes_added={stats.shapes_added} "
            f"shapes_updated={stats.shapes_updated} connections_added={stats.connections_added} "
            f"duplicates_removed={stats.duplicates_removed} warnings={len(stats.warnings)} "
            f"time_ms={stats.processing_time_ms:.2f}"
        )
        return ProcessingOutcome(
            stage=PipelineStage.DONE,
            state=state,
            stats=stats,
            stages=stages,
        )
