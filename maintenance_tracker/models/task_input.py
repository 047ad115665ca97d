"""Validated input for creating maintenance tasks."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .task import Frequency, Priority, TaskType


class TaskInput(BaseModel):
    """Fields a caller supplies when scheduling a new task."""

    model_config = ConfigDict(extra="forbid")

    equipment_id: str = Field(..., min_length=1)
    scheduled_date: date
    title: Optional[str] = None
    description: Optional[str] = None
    type: TaskType = TaskType.PREDICTIVE
    priority: Priority = Priority.MEDIUM
    frequency: Frequency = Frequency.NONE
    custom_days: Optional[int] = None
    estimated_duration: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    category_id: Optional[str] = None
    area_id: Optional[str] = None
    line_id: Optional[str] = None
    task_template_id: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("frequency", mode="before")
    @classmethod
    def _blank_frequency_is_none(cls, value):
        # The dashboard stores a one-off task's frequency as null.
        if value is None or value == "":
            return Frequency.NONE
        return value

    @model_validator(mode="after")
    def _check_recurrence_rule(self) -> "TaskInput":
        from ..core.recurrence import validate_rule

        validate_rule(self.frequency, self.custom_days)
        return self
