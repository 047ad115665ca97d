"""Maintenance task data models."""
import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

from ..exceptions import ValidationError


class TaskStatus(str, Enum):
    """Task status enumeration."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    PARTIAL = "partial"


class TaskType(str, Enum):
    """Kind of maintenance work. Informational only."""
    PREDICTIVE = "predictive"
    CORRECTIVE = "corrective"
    CONDITIONAL = "conditional"


class Priority(str, Enum):
    """Task priority."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Frequency(str, Enum):
    """Recurrence cadence of a task."""
    NONE = "none"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


TERMINAL_STATUSES = frozenset({TaskStatus.COMPLETED, TaskStatus.CANCELLED})


@dataclass(frozen=True)
class TaskRecord:
    """A single scheduled or completed maintenance work item."""
    id: str  # UUID
    equipment_id: str
    scheduled_date: date
    status: TaskStatus = TaskStatus.SCHEDULED
    title: str = ""
    description: str = ""
    type: TaskType = TaskType.PREDICTIVE
    priority: Priority = Priority.MEDIUM
    category_id: Optional[str] = None
    area_id: Optional[str] = None
    line_id: Optional[str] = None
    task_template_id: Optional[str] = None  # snapshot source, not a live link
    completion_date: Optional[datetime] = None
    frequency: Frequency = Frequency.NONE
    custom_days: Optional[int] = None
    estimated_duration: Optional[float] = None  # hours
    actual_duration: Optional[float] = None  # hours, set on completion
    notes: Optional[str] = None
    assigned_to: Optional[str] = None
    follow_up_of: Optional[str] = None  # id of the recurring task this was generated from
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def check_invariants(self) -> None:
        """Raise ValidationError if the record is internally inconsistent."""
        if not self.equipment_id:
            raise ValidationError("equipment_id is required")
        if self.scheduled_date is None:
            raise ValidationError("scheduled_date is required")
        if (self.completion_date is not None) != (self.status == TaskStatus.COMPLETED):
            raise ValidationError(
                f"completion_date must be set exactly when status is completed (status={self.status.value})"
            )
        if self.frequency == Frequency.CUSTOM:
            if not _is_positive_int(self.custom_days):
                raise ValidationError("custom_days must be a positive integer when frequency is custom")
        elif self.custom_days is not None:
            raise ValidationError("custom_days is only allowed when frequency is custom")
        for name in ("estimated_duration", "actual_duration"):
            value = getattr(self, name)
            if value is not None and (not math.isfinite(value) or value <= 0):
                raise ValidationError(f"{name} must be a positive number of hours")


@dataclass(frozen=True)
class StatusHistoryEntry:
    """One recorded status change of a task."""
    task_id: str
    status: TaskStatus
    status_date: datetime
    notes: Optional[str] = None


def is_terminal(task: TaskRecord) -> bool:
    """Completed and cancelled tasks accept no further transitions.

    ``partial`` is not terminal: a partially done task can be worked further.
    """
    return task.status in TERMINAL_STATUSES


def is_overdue_candidate(task: TaskRecord) -> bool:
    """Whether the task can still show up as an alert."""
    return task.status not in TERMINAL_STATUSES


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
