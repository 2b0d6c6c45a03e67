"""
Task modules for the diagram merge pipeline.

Exports: SanitizationTask, DeduplicationTask, MergeTask, ReferenceIntegrityTask, PlacementTask
"""

from .deduplication_task import DeduplicationResult, DeduplicationTask
from .merge_task import MergeResult, MergeTask, OrderedIdMap
from .placement_task import PlacementResult, PlacementTask
from .reference_integrity_task import IntegrityResult, ReferenceIntegrityTask
from .sanitization_task import SanitizationResult, SanitizationTask

__all__ = [
    "SanitizationTask",
    "SanitizationResult",
    "DeduplicationTask",
    "DeduplicationResult",
    "MergeTask",
    "MergeResult",
    "OrderedIdMap",
    "ReferenceIntegrityTask",
    "IntegrityResult",
    "PlacementTask",
    "PlacementResult",
]
