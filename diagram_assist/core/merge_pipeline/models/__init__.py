"""
Models for the diagram merge pipeline.

Exports: diagram models (Shape, Connection, DiagramState, ...) and outcome models
"""

from .diagram import (
    UNNAMED_LABEL,
    Attribute,
    Connection,
    DiagramState,
    Operation,
    Parameter,
    Position,
    RelationshipKind,
    Shape,
    ShapeKind,
    Visibility,
)
from .outcome import (
    ErrorCode,
    PipelineStage,
    ProcessingError,
    ProcessingOutcome,
    ProcessingStats,
)

__all__ = [
    "UNNAMED_LABEL",
    "Attribute",
    "Connection",
    "DiagramState",
    "Operation",
    "Parameter",
    "Position",
    "RelationshipKind",
    "Shape",
    "ShapeKind",
    "Visibility",
    "ErrorCode",
    "PipelineStage",
    "ProcessingError",
    "ProcessingOutcome",
    "ProcessingStats",
]
