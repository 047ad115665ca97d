"""Maintenance task service: the single seam between scheduling logic and storage."""

import logging
import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.alerts import classify
from ..core.recurrence import next_occurrence
from ..core.status_engine import StatusEngine
from ..core.task_storage import TaskStorageManager
from ..exceptions import ConcurrentModificationError, NotFoundError, ValidationError
from ..models.alert import Alert
from ..models.config import TrackerConfig
from ..models.task import (
    Priority,
    StatusHistoryEntry,
    TaskRecord,
    TaskStatus,
    is_terminal,
)
from ..models.task_input import TaskInput

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Outcome of completing a task.

    ``follow_up_error`` is set when the task completed but its next
    occurrence could not be created.
    """
    task: TaskRecord
    follow_up: Optional[TaskRecord] = None
    follow_up_error: Optional[Exception] = None


def _describe_validation_error(error: PydanticValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "input"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


class TaskService:
    """Creates, updates, completes and deletes maintenance tasks."""

    def __init__(self, storage: TaskStorageManager, equipment_directory,
                 template_directory=None, engine: Optional[StatusEngine] = None,
                 config: Optional[TrackerConfig] = None):
        """Initialize the task service.

        Args:
            storage: Persistence for task records
            equipment_directory: Object with ``lookup(equipment_id)`` returning
                the equipment or None
            template_directory: Object with ``lookup_template(template_id)``
            engine: Status engine, defaults to one using the wall clock
            config: Tracker configuration, defaults to ``TrackerConfig()``
        """
        self.storage = storage
        self.equipment_directory = equipment_directory
        self.template_directory = template_directory
        self.engine = engine or StatusEngine()
        self.config = config or TrackerConfig()

    # ---- helpers ----

    def _load(self, task_id: str) -> TaskRecord:
        task = self.storage.load(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def _require_equipment(self, equipment_id: str) -> None:
        if self.equipment_directory.lookup(equipment_id) is None:
            raise ValidationError(f"Equipment {equipment_id} not found")

    def _persist(self, task: TaskRecord, expected_status: TaskStatus) -> TaskRecord:
        try:
            return self.storage.save(task, expected_status=expected_status)
        except ConcurrentModificationError as e:
            logger.warning(f"Concurrent modification of task {task.id}: {e}")
            raise

    def _record_status(self, task: TaskRecord, notes: Optional[str] = None) -> None:
        # History is best-effort once the record itself is stored
        try:
            self.storage.append_history(StatusHistoryEntry(
                task_id=task.id,
                status=task.status,
                status_date=self.engine.clock(),
                notes=notes,
            ))
        except (NotFoundError, OSError) as e:
            logger.warning(f"Could not record status {task.status.value} for task {task.id}: {e}")

    # ---- operations ----

    def create_task(self, data: Union[TaskInput, Mapping[str, Any]]) -> TaskRecord:
        """Schedule a new task.

        Args:
            data: A ``TaskInput`` or a mapping of its fields

        Returns:
            The stored task, status ``scheduled``

        Raises:
            ValidationError: missing or invalid fields, unknown equipment or template
        """
        if isinstance(data, TaskInput):
            task_input = data
        else:
            try:
                task_input = TaskInput.model_validate(dict(data))
            except PydanticValidationError as e:
                raise ValidationError(_describe_validation_error(e)) from e

        self._require_equipment(task_input.equipment_id)

        title = task_input.title
        description = task_input.description
        if task_input.task_template_id:
            if self.template_directory is None:
                raise ValidationError("No task template directory is configured")
            template = self.template_directory.lookup_template(task_input.task_template_id)
            if template is None:
                raise ValidationError(f"Task template {task_input.task_template_id} not found")
            # Snapshot: later template edits do not reach this task
            if title is None:
                title = template.name
            if description is None:
                description = template.description

        task = TaskRecord(
            id=str(uuid.uuid4()),
            equipment_id=task_input.equipment_id,
            scheduled_date=task_input.scheduled_date,
            status=TaskStatus.SCHEDULED,
            title=title or "",
            description=description or "",
            type=task_input.type,
            priority=task_input.priority,
            category_id=task_input.category_id,
            area_id=task_input.area_id,
            line_id=task_input.line_id,
            task_template_id=task_input.task_template_id,
            frequency=task_input.frequency,
            custom_days=task_input.custom_days,
            estimated_duration=task_input.estimated_duration,
            notes=task_input.notes,
            assigned_to=task_input.assigned_to,
        )
        task.check_invariants()

        stored = self.storage.insert(task)
        self._record_status(stored)
        logger.info(f"Created task {stored.id} for equipment {stored.equipment_id} due {stored.scheduled_date}")
        return stored

    def get_task(self, task_id: str) -> TaskRecord:
        """Get a task by ID, raising NotFoundError if it does not exist."""
        return self._load(task_id)

    def update_task(self, task_id: str, patch: Mapping[str, Any]) -> TaskRecord:
        """Edit a task's fields or, when ``patch`` has a status, transition it.

        A ``completed`` status goes through ``complete_task`` so recurring
        tasks get their next occurrence here as well.

        Raises:
            NotFoundError: unknown task ID
            ImmutableRecordError: editing a completed or cancelled task
            InvalidTransitionError: the status change is not allowed
            ConcurrentModificationError: the status changed since it was loaded
        """
        patch = dict(patch)
        if patch.get("status") == TaskStatus.COMPLETED:
            result = self.complete_task(task_id, patch.get("actual_duration"), patch.get("notes"))
            return result.task

        task = self._load(task_id)

        if "status" in patch:
            target = patch.pop("status")
            updated = self.engine.transition(task, target, patch)
        else:
            updated = self.engine.edit(task, patch)
            if updated.equipment_id != task.equipment_id:
                self._require_equipment(updated.equipment_id)

        stored = self._persist(updated, expected_status=task.status)

        if stored.status != task.status:
            notes = stored.notes if stored.notes != task.notes else None
            self._record_status(stored, notes)
            logger.info(f"Task {task_id} moved from {task.status.value} to {stored.status.value}")
        else:
            logger.debug(f"Task {task_id} edited: {', '.join(sorted(patch))}")
        return stored

    def complete_task(self, task_id: str, actual_duration, notes: Optional[str] = None) -> CompletionResult:
        """Complete a task and, for recurring tasks, schedule its next occurrence.

        A failure while creating the follow-up does not undo the completion;
        it is returned in ``CompletionResult.follow_up_error``.

        Raises:
            NotFoundError: unknown task ID
            InvalidTransitionError: the task is already completed or cancelled
            ValidationError: actual_duration is missing or not positive
            ConcurrentModificationError: another caller changed the status first
        """
        task = self._load(task_id)
        completed = self.engine.complete(task, actual_duration, notes)
        stored = self._persist(completed, expected_status=task.status)
        self._record_status(stored, notes)
        logger.info(f"Completed task {task_id} in {stored.actual_duration}h")

        result = CompletionResult(task=stored)
        if self.config.auto_follow_up and self.engine.requires_follow_up(stored):
            try:
                result.follow_up = self._create_follow_up(stored)
            except Exception as e:
                logger.warning(f"Task {task_id} completed but its follow-up could not be created: {e}")
                result.follow_up_error = e
        return result

    def _create_follow_up(self, task: TaskRecord) -> TaskRecord:
        if self.config.recurrence_anchor == "scheduled":
            anchor = task.scheduled_date
        else:
            anchor = task.completion_date.date()

        next_date = next_occurrence(anchor, task.frequency, task.custom_days)
        follow_up = replace(
            task,
            id=str(uuid.uuid4()),
            status=TaskStatus.SCHEDULED,
            scheduled_date=next_date,
            completion_date=None,
            actual_duration=None,
            notes=None,
            follow_up_of=task.id,
            created_at=None,
            updated_at=None,
        )
        follow_up.check_invariants()

        stored = self.storage.insert(follow_up)
        self._record_status(stored)
        logger.info(f"Scheduled follow-up {stored.id} of task {task.id} for {next_date}")
        return stored

    def delete_task(self, task_id: str) -> None:
        """Delete a task, raising NotFoundError if it does not exist."""
        if not self.storage.delete(task_id):
            raise NotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")

    def list_alerts(self, reference_date: Optional[date] = None,
                    horizon_days: Optional[int] = None) -> List[Alert]:
        """Classify all open tasks into overdue, today and upcoming alerts.

        Args:
            reference_date: Day to classify against, defaults to today
            horizon_days: Upcoming window, defaults to the configured one
        """
        if reference_date is None:
            reference_date = date.today()
        if horizon_days is None:
            horizon_days = self.config.horizon_days

        open_tasks = [task for task in self.storage.list_tasks() if not is_terminal(task)]
        return classify(open_tasks, reference_date, horizon_days)

    def get_status_history(self, task_id: str) -> List[StatusHistoryEntry]:
        """Get a task's status changes, newest first."""
        self._load(task_id)
        return self.storage.get_history(task_id)

    def list_tasks(self, status=None, equipment_id: Optional[str] = None, priority=None,
                   assigned_to: Optional[str] = None, start_date: Optional[date] = None,
                   end_date: Optional[date] = None) -> List[TaskRecord]:
        """List tasks ordered by scheduled date, narrowed by any given filters.

        The date range is inclusive on both ends.
        """
        try:
            status = TaskStatus(status) if status is not None else None
            priority = Priority(priority) if priority is not None else None
        except ValueError as e:
            raise ValidationError(str(e)) from e

        tasks = self.storage.list_tasks(status)
        if equipment_id:
            tasks = [t for t in tasks if t.equipment_id == equipment_id]
        if priority:
            tasks = [t for t in tasks if t.priority == priority]
        if assigned_to:
            tasks = [t for t in tasks if t.assigned_to == assigned_to]
        if start_date:
            tasks = [t for t in tasks if t.scheduled_date >= start_date]
        if end_date:
            tasks = [t for t in tasks if t.scheduled_date <= end_date]
        return tasks

    def search_tasks(self, query: str) -> List[TaskRecord]:
        """Search tasks by title, description and notes."""
        query_lower = query.lower()
        return [
            task for task in self.storage.list_tasks()
            if query_lower in task.title.lower()
            or query_lower in task.description.lower()
            or query_lower in (task.notes or "").lower()
        ]
