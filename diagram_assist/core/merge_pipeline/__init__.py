"""
Diagram merge pipeline.

Validates, cleans, deduplicates and merges untrusted generator proposals into
the diagram state held by the editor.

Dependencies: pydantic, pydantic_settings
System role: Proposal merge pipeline entrypoint
"""

from .configs import (
    MergePipelineSettings,
    get_pipeline_settings,
)
from .diagram_cleaner import DiagramValidation, clean_and_validate, clean_diagram, validate_diagram
from .entrypoint import DiagramMergePipeline
from .error_classifier import classify_error
from .models import DiagramState, ProcessingOutcome, ProcessingStats

__all__ = [
    "DiagramMergePipeline",
    "MergePipelineSettings",
    "get_pipeline_settings",
    "DiagramState",
    "ProcessingOutcome",
    "ProcessingStats",
    "DiagramValidation",
    "clean_and_validate",
    "clean_diagram",
    "validate_diagram",
    "classify_error",
]
