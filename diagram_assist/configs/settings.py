"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from diagram_assist.configs.base import BaseSettings
from diagram_assist.core.merge_pipeline.configs import MergePipelineSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    pipeline: MergePipelineSettings = Field(default_factory=MergePipelineSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from diagram_assist.configs import get_settings
        settings = get_settings()
    """
    return Settings()
