"""
Reference integrity task.

Drops every connection whose source or target is not a shape of the merged
state. Runs after the merge, since a connection may point at a shape that
arrived in the same proposal.

Dependencies: merge_pipeline.models
System role: Fourth stage of the merge pipeline
"""

import logging
from dataclasses import dataclass, field

from diagram_assist.core.exceptions import ReferenceWarning

from ..models import DiagramState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrityResult:
    """State without orphaned connections plus one warning per drop."""

    state: DiagramState
    removed: tuple[str, ...] = ()
    warnings: list[str] = field(default_factory=list)


class ReferenceIntegrityTask:
    """Remove orphaned connections from a merged state."""

    def check(self, state: DiagramState) -> IntegrityResult:
        """
        Keep only connections whose endpoints both exist.

        Args:
            state: Merged diagram state

        Returns:
            IntegrityResult: Cleaned state, removed connection ids, warnings
        """
        shape_ids = state.shape_ids()
        kept = []
        removed = []
        warnings = []

        for connection in state.connections:
            if connection.source in shape_ids and connection.target in shape_ids:
                kept.append(connection)
                continue
            warning = ReferenceWarning(connection.id, connection.source, connection.target)
            removed.append(connection.id)
            warnings.append(warning.message)
            logger.warning(f"{__name__}:check - {warning}")

        if not removed:
            return IntegrityResult(state=state)

        return IntegrityResult(
            state=state.model_copy(update={"connections": tuple(kept)}),
            removed=tuple(removed),
            warnings=warnings,
        )
