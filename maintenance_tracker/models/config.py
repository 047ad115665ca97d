"""Configuration models for Maintenance Tracker."""

from typing import Literal

from pydantic import BaseModel, Field


class TrackerConfig(BaseModel):
    """Per-project tracker configuration."""
    horizon_days: int = Field(3, ge=0, description="Days ahead that count as upcoming")
    auto_follow_up: bool = Field(True, description="Create the next occurrence when a recurring task completes")
    recurrence_anchor: Literal["completion", "scheduled"] = Field(
        "completion", description="Date the next occurrence is computed from"
    )
    log_level: str = "WARNING"
