"""
Diagram audit and pre-save cleaning.

Checks a whole diagram state for duplicate identifiers, invalid labels and
orphaned or duplicated connections, and produces a cleaned copy before it is
handed on for saving or broadcasting.

Dependencies: pydantic, merge_pipeline.models
System role: Whole-diagram consistency checks outside the proposal flow
"""

import logging
from collections import Counter

from pydantic import BaseModel, Field

from .models import UNNAMED_LABEL, Connection, DiagramState, Shape
from .tasks.merge_task import OrderedIdMap

logger = logging.getLogger(__name__)


class DiagramValidation(BaseModel):
    """Result of auditing a diagram state."""

    valid: bool = Field(description="True when no errors were found")
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


def _has_real_label(shape: Shape, unnamed_label: str) -> bool:
    label = shape.label.strip()
    return bool(label) and label not in (unnamed_label, UNNAMED_LABEL)


def validate_diagram(state: DiagramState, unnamed_label: str = UNNAMED_LABEL) -> DiagramValidation:
    """
    Audit a diagram state without changing it.

    Args:
        state: Diagram state to audit
        unnamed_label: Placeholder label treated as invalid

    Returns:
        DiagramValidation: Errors (duplicate ids, bad labels, orphans) and warnings
    """
    errors: list[str] = []
    warnings: list[str] = []

    id_counts = Counter(shape.id for shape in state.shapes)
    duplicate_ids = [shape_id for shape_id, count in id_counts.items() if count > 1]
    if duplicate_ids:
        errors.append(f"Duplicate shape IDs found: {', '.join(duplicate_ids)}")

    unlabeled = [shape.id for shape in state.shapes if not _has_real_label(shape, unnamed_label)]
    if unlabeled:
        errors.append(f"{len(unlabeled)} shapes have invalid labels: {', '.join(unlabeled)}")

    shape_ids = set(id_counts)
    orphaned = [
        connection
        for connection in state.connections
        if connection.source not in shape_ids or connection.target not in shape_ids
    ]
    if orphaned:
        errors.append(
            f"{len(orphaned)} orphaned connections found (reference non-existent shapes)"
        )

    pair_counts = Counter((c.source, c.target) for c in state.connections)
    duplicate_pairs = sum(count - 1 for count in pair_counts.values() if count > 1)
    if duplicate_pairs:
        warnings.append(f"{duplicate_pairs} duplicate connections found")

    return DiagramValidation(valid=not errors, errors=errors, warnings=warnings)


def clean_diagram(state: DiagramState, unnamed_label: str = UNNAMED_LABEL) -> DiagramState:
    """
    Return a cleaned copy of a diagram state.

    Keeps the last version per shape identifier, drops shapes with invalid
    labels, drops connections whose endpoints are missing, and keeps the last
    connection per (source, target) pair.

    Args:
        state: Diagram state to clean (not modified)
        unnamed_label: Placeholder label treated as invalid

    Returns:
        DiagramState: Cleaned state
    """
    shapes = [
        shape
        for shape in OrderedIdMap(state.shapes)
        if _has_real_label(shape, unnamed_label)
    ]
    shape_ids = {shape.id for shape in shapes}

    by_pair: dict[tuple[str, str], Connection] = {}
    for connection in state.connections:
        if connection.source in shape_ids and connection.target in shape_ids:
            by_pair[(connection.source, connection.target)] = connection

    removed_shapes = len(state.shapes) - len(shapes)
    removed_connections = len(state.connections) - len(by_pair)
    if removed_shapes or removed_connections:
        logger.info(
            f"{__name__}:clean_diagram - removed_shapes={removed_shapes} "
            f"removed_connections={removed_connections}"
        )

    return DiagramState(shapes=tuple(shapes), connections=tuple(by_pair.values()))


def clean_and_validate(state: DiagramState, unnamed_label: str = UNNAMED_LABEL) -> DiagramState:
    """
    Validate, clean, then revalidate a diagram state before saving.

    Args:
        state: Diagram state to clean
        unnamed_label: Placeholder label treated as invalid

    Returns:
        DiagramState: Cleaned state
    """
    validation = validate_diagram(state, unnamed_label)
    if validation.errors:
        logger.warning(f"{__name__}:clean_and_validate - errors={validation.errors}")
    if validation.warnings:
        logger.info(f"{__name__}:clean_and_validate - warnings={validation.warnings}")

    cleaned = clean_diagram(state, unnamed_label)

    revalidation = validate_diagram(cleaned, unnamed_label)
    if not revalidation.valid:
        logger.error(
            f"{__name__}:clean_and_validate - still invalid after cleaning: {revalidation.errors}"
        )
    return cleaned
