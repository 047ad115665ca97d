"""Core scheduling functionality for Maintenance Tracker."""

from .alerts import classify, summarize
from .recurrence import next_occurrence, validate_rule
from .status_engine import StatusEngine
from .task_storage import TaskStorageManager

__all__ = [
    'classify',
    'summarize',
    'next_occurrence',
    'validate_rule',
    'StatusEngine',
    'TaskStorageManager'
]
