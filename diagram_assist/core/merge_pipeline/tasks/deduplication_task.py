"""
Duplicate detection task for sanitized proposals.

Compares proposed elements against each other (not against the current
diagram). First occurrence wins: later duplicates in the same batch are
dropped, never merged.

Dependencies: merge_pipeline.models
System role: Second stage of the merge pipeline
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Hashable, TypeVar

from ..models import Connection, Shape

logger = logging.getLogger(__name__)

T = TypeVar("T", Shape, Connection)


@dataclass
class DeduplicationResult:
    """Unique proposals in input order plus the number dropped."""

    shapes: list[Shape] = field(default_factory=list)
    connections: list[Connection] = field(default_factory=list)
    duplicates: int = 0
    warnings: list[str] = field(default_factory=list)


def _first_wins(
    items: list[T],
    content_key: Callable[[T], Hashable],
    describe: Callable[[T], str],
    warnings: list[str],
) -> tuple[list[T], int]:
    seen_keys: set[Hashable] = set()
    seen_ids: set[str] = set()
    unique: list[T] = []
    duplicates = 0

    for item in items:
        key = content_key(item)
        if key in seen_keys:
            warnings.append(f"Duplicate {describe(item)} removed (same content as an earlier proposal)")
            duplicates += 1
            continue
        if item.id in seen_ids:
            warnings.append(f'Duplicate {describe(item)} removed (ID "{item.id}" already proposed)')
            duplicates += 1
            continue
        seen_keys.add(key)
        seen_ids.add(item.id)
        unique.append(item)

    return unique, duplicates


class DeduplicationTask:
    """Drop redundant proposals within one batch."""

    def deduplicate(
        self,
        shapes: list[Shape],
        connections: list[Connection],
    ) -> DeduplicationResult:
        """
        Remove duplicate shapes and connections.

        Shapes are keyed by content signature (label plus attribute names),
        connections by (source, target, kind). Either kind of element is also
        dropped when its identifier was already proposed earlier in the batch.

        Args:
            shapes: Sanitized shapes in proposal order
            connections: Sanitized connections in proposal order

        Returns:
            DeduplicationResult: Surviving elements and duplicate count
        """
        warnings: list[str] = []
        unique_shapes, shape_duplicates = _first_wins(
            shapes,
            lambda shape: shape.signature,
            lambda shape: f'shape "{shape.label}" ({shape.id})',
            warnings,
        )
        unique_connections, connection_duplicates = _first_wins(
            connections,
            lambda connection: connection.key,
            lambda connection: (
                f"connection {connection.source} -> {connection.target} "
                f"[{connection.kind.value}] ({connection.id})"
            ),
            warnings,
        )

        total = shape_duplicates + connection_duplicates
        if total:
            logger.info(
                f"{__name__}:deduplicate - removed={total} "
                f"shapes={shape_duplicates} connections={connection_duplicates}"
            )

        return DeduplicationResult(
            shapes=unique_shapes,
            connections=unique_connections,
            duplicates=total,
            warnings=warnings,
        )
