"""
Processing outcome models for the merge pipeline.

Represents the result of running one proposal through the pipeline: the new
diagram state plus statistics, or a rejection with an error classification.

Dependencies: pydantic
System role: Return type for DiagramMergePipeline.process()
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .diagram import DiagramState


class PipelineStage(str, Enum):
    """States of the pipeline state machine."""

    VALIDATING = "validating"
    CLEANING = "cleaning"
    DEDUPLICATING = "deduplicating"
    MERGING = "merging"
    CHECKING_REFERENCES = "checking_references"
    PLACING_POSITIONS = "placing_positions"
    DONE = "done"
    REJECTED = "rejected"


class ErrorCode(str, Enum):
    """Classification codes for failures around the pipeline."""

    TIMEOUT = "TIMEOUT"
    INVALID_JSON = "INVALID_JSON"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNKNOWN = "UNKNOWN"


class ProcessingError(BaseModel):
    """Classified failure, with whether a retry prompt makes sense."""

    code: ErrorCode = Field(description="Failure classification")
    message: str = Field(description="User-facing message")
    recoverable: bool = Field(description="Whether retrying may succeed")


class ProcessingStats(BaseModel):
    """Counters and diagnostics for one pipeline run."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    shapes_added: int = Field(default=0, description="Shapes appended to the diagram")
    shapes_updated: int = Field(default=0, description="Existing shapes replaced by a proposal")
    connections_added: int = Field(default=0, description="Connections appended to the diagram")
    duplicates_removed: int = Field(default=0, description="Proposals dropped as duplicates")
    connections_removed: int = Field(default=0, description="Orphaned connections dropped")
    warnings: list[str] = Field(default_factory=list, description="Human-readable warnings")
    processing_time_ms: float = Field(default=0.0, description="Wall time of the run in milliseconds")


class ProcessingOutcome(BaseModel):
    """Terminal result of the pipeline: Done with a state, or Rejected."""

    stage: PipelineStage = Field(description="Terminal stage (done or rejected)")
    state: DiagramState | None = Field(default=None, description="New diagram state when done")
    stats: ProcessingStats = Field(default_factory=ProcessingStats)
    errors: list[str] = Field(default_factory=list, description="Rejection reasons")
    error: ProcessingError | None = Field(default=None, description="Rejection classification")
    stages: list[PipelineStage] = Field(default_factory=list, description="States visited, in order")

    @property
    def succeeded(self) -> bool:
        return self.stage is PipelineStage.DONE
