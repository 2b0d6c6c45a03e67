"""
Configuration settings for the diagram merge pipeline.

Provides environment-based configuration for sanitization, layout and limits.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MergePipelineSettings(BaseSettings):
    """Settings for the proposal merge pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DIAGRAM_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Sanitization settings
    unnamed_label: str = Field(
        default="Unnamed Class",
        description="Placeholder label that marks a shape the generator failed to name",
    )
    default_multiplicity: str = Field(
        default="1",
        description="Multiplicity used when a connection end has none",
    )
    max_elements: int = Field(
        default=500,
        gt=0,
        description="Largest element list accepted in a single proposal",
    )

    # Layout settings
    grid_step: int = Field(
        default=300,
        gt=0,
        description="Distance between placement grid cells, also the nudge distance",
    )
    grid_offset: int = Field(
        default=100,
        description="Coordinate of the first grid cell on both axes",
    )
    grid_max_x: int = Field(
        default=1500,
        description="Largest x coordinate before wrapping to the next row",
    )
    snap_resolution: int = Field(
        default=50,
        gt=0,
        description="Resolution used when checking two shapes for overlap",
    )
    max_coordinate: float = Field(
        default=1_000_000,
        gt=0,
        description="Largest absolute coordinate kept as given; beyond it a shape is placed automatically",
    )


@lru_cache
def get_pipeline_settings() -> MergePipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        MergePipelineSettings: Singleton settings loaded from environment
    """
    return MergePipelineSettings()
