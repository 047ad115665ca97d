"""Task storage manager for persistent maintenance task tracking."""
import json
import logging
import os
import shutil
import threading
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional

from ..exceptions import ConcurrentModificationError, NotFoundError
from ..models.task import (
    Frequency,
    Priority,
    StatusHistoryEntry,
    TaskRecord,
    TaskStatus,
    TaskType,
)
from .constants import HISTORY_FILE_NAME, METADATA_FILE_NAME, REGISTRY_FILE_NAME, TASKS_DIR_NAME

logger = logging.getLogger(__name__)

# One lock per storage directory, shared by every manager opened on it
_STORE_LOCKS: Dict[Path, threading.RLock] = {}
_STORE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.RLock:
    with _STORE_LOCKS_GUARD:
        return _STORE_LOCKS.setdefault(path.resolve(), threading.RLock())


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class TaskStorageManager:
    """Manages persistent storage of maintenance tasks and their status history.

    Layout under ``data_dir``::

        tasks/task_registry.json         id -> summary used for listing
        tasks/tasks/<id>/metadata.json   the full task record
        tasks/tasks/<id>/status_history.json
    """

    def __init__(self, data_dir: Path):
        """Initialize task storage manager.

        Args:
            data_dir: The .maintenance-tracker directory for the project
        """
        self.tasks_dir = data_dir / TASKS_DIR_NAME
        self.registry_file = self.tasks_dir / REGISTRY_FILE_NAME
        self._ensure_storage_structure()
        self._lock = _lock_for(self.tasks_dir)

    def _ensure_storage_structure(self) -> None:
        """Ensure the storage directory structure exists."""
        self.tasks_dir.mkdir(parents=True, exist_ok=True)
        (self.tasks_dir / "tasks").mkdir(exist_ok=True)

        # Create registry file if it doesn't exist
        if not self.registry_file.exists():
            self._save_registry({})

    @staticmethod
    def _write_json(path: Path, data) -> None:
        """Write JSON through a temp file so readers never see half a file."""
        tmp_path = path.with_name(path.name + ".tmp")
        with open(tmp_path, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, path)

    def _load_registry(self) -> dict:
        """Load the task registry from disk."""
        if self.registry_file.exists():
            with open(self.registry_file) as f:
                return json.load(f)
        return {}

    def _save_registry(self, registry: dict) -> None:
        """Save the task registry to disk."""
        self._write_json(self.registry_file, registry)

    def _get_task_dir(self, task_id: str) -> Path:
        """Get the directory for a specific task."""
        return self.tasks_dir / "tasks" / task_id

    def _serialize_task(self, task: TaskRecord) -> dict:
        """Serialize a task to JSON-compatible dict."""
        return {
            "id": task.id,
            "equipment_id": task.equipment_id,
            "title": task.title,
            "description": task.description,
            "type": task.type.value,
            "priority": task.priority.value,
            "status": task.status.value,
            "scheduled_date": task.scheduled_date.isoformat(),
            "completion_date": _iso(task.completion_date),
            "frequency": task.frequency.value,
            "custom_days": task.custom_days,
            "estimated_duration": task.estimated_duration,
            "actual_duration": task.actual_duration,
            "category_id": task.category_id,
            "area_id": task.area_id,
            "line_id": task.line_id,
            "task_template_id": task.task_template_id,
            "notes": task.notes,
            "assigned_to": task.assigned_to,
            "follow_up_of": task.follow_up_of,
            "created_at": _iso(task.created_at),
            "updated_at": _iso(task.updated_at),
        }

    def _deserialize_task(self, data: dict) -> TaskRecord:
        """Deserialize a task from JSON data."""
        return TaskRecord(
            id=data["id"],
            equipment_id=data["equipment_id"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            type=TaskType(data.get("type", TaskType.PREDICTIVE.value)),
            priority=Priority(data.get("priority", Priority.MEDIUM.value)),
            status=TaskStatus(data["status"]),
            scheduled_date=date.fromisoformat(data["scheduled_date"]),
            completion_date=_from_iso(data.get("completion_date")),
            frequency=Frequency(data.get("frequency") or Frequency.NONE.value),
            custom_days=data.get("custom_days"),
            estimated_duration=data.get("estimated_duration"),
            actual_duration=data.get("actual_duration"),
            category_id=data.get("category_id"),
            area_id=data.get("area_id"),
            line_id=data.get("line_id"),
            task_template_id=data.get("task_template_id"),
            notes=data.get("notes"),
            assigned_to=data.get("assigned_to"),
            follow_up_of=data.get("follow_up_of"),
            created_at=_from_iso(data.get("created_at")),
            updated_at=_from_iso(data.get("updated_at")),
        )

    def _write_task(self, task: TaskRecord) -> None:
        task_dir = self._get_task_dir(task.id)
        task_dir.mkdir(parents=True, exist_ok=True)
        self._write_json(task_dir / METADATA_FILE_NAME, self._serialize_task(task))

        registry = self._load_registry()
        registry[task.id] = {
            "equipment_id": task.equipment_id,
            "scheduled_date": task.scheduled_date.isoformat(),
            "status": task.status.value,
        }
        self._save_registry(registry)

    def insert(self, task: TaskRecord) -> TaskRecord:
        """Store a new task.

        Args:
            task: The record to store; its ID must not exist yet

        Returns:
            The stored record with created_at/updated_at filled in
        """
        with self._lock:
            if self._get_task_dir(task.id).exists():
                raise ValueError(f"Task {task.id} already exists")

            now = datetime.now()
            stored = replace(task, created_at=now, updated_at=now)
            self._write_task(stored)
            self._write_json(self._get_task_dir(task.id) / HISTORY_FILE_NAME, [])

        logger.debug(f"Inserted task {task.id} for equipment {task.equipment_id}")
        return stored

    def load(self, task_id: str) -> Optional[TaskRecord]:
        """Get a task by ID.

        Args:
            task_id: The task ID

        Returns:
            TaskRecord if found, None otherwise
        """
        metadata_file = self._get_task_dir(task_id) / METADATA_FILE_NAME
        if not metadata_file.exists():
            return None

        with open(metadata_file) as f:
            data = json.load(f)

        return self._deserialize_task(data)

    def save(self, task: TaskRecord, expected_status: Optional[TaskStatus] = None) -> TaskRecord:
        """Overwrite an existing task.

        When ``expected_status`` is given the write only happens if the stored
        status still equals it, the same as ``UPDATE ... WHERE status = ?``.

        Args:
            task: The updated record
            expected_status: Status the caller loaded before changing the record

        Returns:
            The stored record with updated_at refreshed

        Raises:
            NotFoundError: the task no longer exists
            ConcurrentModificationError: the stored status no longer matches
        """
        with self._lock:
            current = self.load(task.id)
            if current is None:
                raise NotFoundError(task.id)
            if expected_status is not None and current.status != expected_status:
                raise ConcurrentModificationError(task.id, expected_status, current.status)

            stored = replace(task, created_at=current.created_at, updated_at=datetime.now())
            self._write_task(stored)

        return stored

    def delete(self, task_id: str) -> bool:
        """Delete a task and all associated data.

        Args:
            task_id: The task ID

        Returns:
            True if the task existed
        """
        with self._lock:
            registry = self._load_registry()
            existed = task_id in registry
            if existed:
                del registry[task_id]
                self._save_registry(registry)

            task_dir = self._get_task_dir(task_id)
            if task_dir.exists():
                existed = True
                shutil.rmtree(task_dir)

        return existed

    def list_tasks(self, status: Optional[TaskStatus] = None) -> List[TaskRecord]:
        """List all tasks, optionally filtered by status.

        Returns:
            Tasks ordered by scheduled date, then creation time
        """
        registry = self._load_registry()
        tasks = []

        for task_id, summary in registry.items():
            if status is not None and summary.get("status") != status.value:
                continue
            task = self.load(task_id)
            if task:
                tasks.append(task)

        tasks.sort(key=lambda t: (t.scheduled_date, t.created_at or datetime.min))
        return tasks

    def append_history(self, entry: StatusHistoryEntry) -> None:
        """Record a status change for a task."""
        task_dir = self._get_task_dir(entry.task_id)
        history_file = task_dir / HISTORY_FILE_NAME
        with self._lock:
            if not task_dir.exists():
                raise NotFoundError(entry.task_id)
            entries = []
            if history_file.exists():
                with open(history_file) as f:
                    entries = json.load(f)
            entries.append({
                "status": entry.status.value,
                "status_date": entry.status_date.isoformat(),
                "notes": entry.notes,
            })
            self._write_json(history_file, entries)

    def get_history(self, task_id: str) -> List[StatusHistoryEntry]:
        """Get the status history of a task, newest first."""
        history_file = self._get_task_dir(task_id) / HISTORY_FILE_NAME
        if not history_file.exists():
            return []

        with open(history_file) as f:
            entries = json.load(f)

        history = [
            StatusHistoryEntry(
                task_id=task_id,
                status=TaskStatus(entry["status"]),
                status_date=datetime.fromisoformat(entry["status_date"]),
                notes=entry.get("notes"),
            )
            for entry in entries
        ]
        # Appended in chronological order; reversing keeps ties newest-first
        history.reverse()
        return history
