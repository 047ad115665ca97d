"""Status state machine for maintenance tasks."""

import math
from dataclasses import fields, replace
from datetime import date, datetime
from numbers import Real
from typing import Any, Callable, Dict, Mapping, Optional

from ..exceptions import ImmutableRecordError, InvalidTransitionError, ValidationError
from ..models.task import Frequency, Priority, TaskRecord, TaskStatus, is_terminal

# Every legal status edge. Completed and cancelled have no outgoing edges.
ALLOWED_TRANSITIONS: Dict[TaskStatus, frozenset] = {
    TaskStatus.SCHEDULED: frozenset({
        TaskStatus.IN_PROGRESS, TaskStatus.CANCELLED, TaskStatus.COMPLETED, TaskStatus.PARTIAL,
    }),
    TaskStatus.IN_PROGRESS: frozenset({
        TaskStatus.COMPLETED, TaskStatus.CANCELLED, TaskStatus.PARTIAL,
    }),
    TaskStatus.PARTIAL: frozenset({
        TaskStatus.IN_PROGRESS, TaskStatus.COMPLETED, TaskStatus.CANCELLED,
    }),
    TaskStatus.COMPLETED: frozenset(),
    TaskStatus.CANCELLED: frozenset(),
}

# Fields a transition may carry, keyed by target status
TRANSITION_FIELDS: Dict[TaskStatus, frozenset] = {
    TaskStatus.COMPLETED: frozenset({"actual_duration", "notes"}),
    TaskStatus.PARTIAL: frozenset({"notes"}),
}

EDITABLE_FIELDS = frozenset({
    "title", "description", "equipment_id", "category_id", "area_id", "line_id",
    "priority", "scheduled_date", "frequency", "custom_days", "estimated_duration",
    "assigned_to", "notes",
})

_RECORD_FIELDS = frozenset(f.name for f in fields(TaskRecord))


def _as_status(value) -> Optional[TaskStatus]:
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def _positive_hours(name: str, value) -> float:
    if (value is None or isinstance(value, bool) or not isinstance(value, Real)
            or not math.isfinite(value) or value <= 0):
        raise ValidationError(f"{name} must be a positive number of hours, got {value!r}")
    return float(value)


def _coerce_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError(f"scheduled_date must be a YYYY-MM-DD date, got {value!r}")


def _coerce_enum(enum_cls, name: str, value):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"{name} must be one of: {allowed}")


class StatusEngine:
    """Validates and applies task status changes.

    Records are never mutated in place; every operation returns a new
    ``TaskRecord``. The engine never creates follow-up tasks, it only reports
    whether a completed task recurs.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        """Initialize the engine.

        Args:
            clock: Source of the completion timestamp
        """
        self.clock = clock

    @staticmethod
    def can_transition(current: TaskStatus, target: TaskStatus) -> bool:
        """Whether ``current -> target`` is a legal edge."""
        return target in ALLOWED_TRANSITIONS.get(current, frozenset())

    @staticmethod
    def requires_follow_up(task: TaskRecord) -> bool:
        """Whether a completed task recurs and should get a next occurrence."""
        return task.status == TaskStatus.COMPLETED and task.frequency != Frequency.NONE

    def complete(self, task: TaskRecord, actual_duration, notes: Optional[str] = None) -> TaskRecord:
        """Mark a task completed.

        Args:
            task: The task to complete
            actual_duration: Hours spent, must be positive
            notes: Completion notes

        Returns:
            The completed record

        Raises:
            InvalidTransitionError: the task is already completed or cancelled
            ValidationError: actual_duration is missing or not positive
        """
        if not self.can_transition(task.status, TaskStatus.COMPLETED):
            raise InvalidTransitionError(task.status, TaskStatus.COMPLETED)
        hours = _positive_hours("actual_duration", actual_duration)

        return replace(
            task,
            status=TaskStatus.COMPLETED,
            completion_date=self.clock(),
            actual_duration=hours,
            notes=notes if notes is not None else task.notes,
        )

    def transition(self, task: TaskRecord, target_status, fields: Optional[Mapping[str, Any]] = None) -> TaskRecord:
        """Move a task along one edge of the transition table.

        Only the fields relevant to the edge are applied; anything else in
        ``fields`` is ignored.
        """
        target = _as_status(target_status)
        if target is None or not self.can_transition(task.status, target):
            raise InvalidTransitionError(task.status, target or target_status)

        fields = fields or {}
        if target == TaskStatus.COMPLETED:
            return self.complete(task, fields.get("actual_duration"), fields.get("notes"))

        changes: Dict[str, Any] = {"status": target}
        for name in TRANSITION_FIELDS.get(target, ()):
            if name in fields:
                changes[name] = fields[name]
        return replace(task, **changes)

    def edit(self, task: TaskRecord, patch: Mapping[str, Any]) -> TaskRecord:
        """Apply non-status field changes to an open task.

        Raises:
            ImmutableRecordError: the task is completed or cancelled
            ValidationError: the patch touches status, a protected field, or
                leaves the record inconsistent
        """
        if is_terminal(task):
            raise ImmutableRecordError(f"Task {task.id} is {task.status.value} and can no longer be edited")
        if "status" in patch:
            raise ValidationError("status cannot be edited directly; use a transition")

        unknown = set(patch) - _RECORD_FIELDS
        if unknown:
            raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
        protected = set(patch) - EDITABLE_FIELDS
        if protected:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(protected))}")

        changes = dict(patch)
        if "scheduled_date" in changes:
            changes["scheduled_date"] = _coerce_date(changes["scheduled_date"])
        if "priority" in changes:
            changes["priority"] = _coerce_enum(Priority, "priority", changes["priority"])
        if "frequency" in changes:
            raw = changes["frequency"]
            changes["frequency"] = Frequency.NONE if raw in (None, "") else _coerce_enum(Frequency, "frequency", raw)
            if changes["frequency"] != Frequency.CUSTOM and "custom_days" not in changes:
                changes["custom_days"] = None
        if changes.get("estimated_duration") is not None:
            changes["estimated_duration"] = _positive_hours("estimated_duration", changes["estimated_duration"])

        updated = replace(task, **changes)
        updated.check_invariants()
        return updated
