"""Models for Maintenance Tracker."""

from .alert import Alert, AlertBucket
from .config import TrackerConfig
from .directory import Directory, Equipment, TaskTemplate
from .task import (
    Frequency,
    Priority,
    StatusHistoryEntry,
    TaskRecord,
    TaskStatus,
    TaskType,
    is_overdue_candidate,
    is_terminal,
)
from .task_input import TaskInput

__all__ = [
    'Alert',
    'AlertBucket',
    'TrackerConfig',
    'Directory',
    'Equipment',
    'TaskTemplate',
    'Frequency',
    'Priority',
    'StatusHistoryEntry',
    'TaskRecord',
    'TaskStatus',
    'TaskType',
    'is_overdue_candidate',
    'is_terminal',
    'TaskInput',
]
