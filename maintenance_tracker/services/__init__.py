"""Service layer orchestrating task scheduling and persistence."""

from .task_service import CompletionResult, TaskService
from ..exceptions import (
    MaintenanceError,
    ValidationError,
    InvalidRuleError,
    InvalidTransitionError,
    ImmutableRecordError,
    NotFoundError,
    ConcurrentModificationError,
)

__all__ = [
    "CompletionResult",
    "TaskService",
    "MaintenanceError",
    "ValidationError",
    "InvalidRuleError",
    "InvalidTransitionError",
    "ImmutableRecordError",
    "NotFoundError",
    "ConcurrentModificationError",
]
