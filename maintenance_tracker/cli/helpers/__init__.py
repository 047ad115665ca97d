"""CLI Helper Functions for Maintenance Tracker.

This module provides reusable helper functions for CLI commands to reduce
code duplication and standardize behavior across all commands.

The helpers provide:
- Project context and data directory checks
- Task service construction from the project's config and directory
- Task ID resolution with short ID support
- Consistent table formatting for output
- Logging setup and error reporting
"""

import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

import click
from tabulate import tabulate

from maintenance_tracker.core.constants import (
    DATA_DIR_NAME,
    DATE_FORMAT,
    LOG_FORMAT,
    SHORT_ID_LENGTH,
)
from maintenance_tracker.core.task_storage import TaskStorageManager
from maintenance_tracker.models.task import Priority, TaskRecord, TaskStatus
from maintenance_tracker.services.task_service import TaskService
from maintenance_tracker.utils.config_manager import ConfigManager
from maintenance_tracker.utils.directory_manager import DirectoryManager

STATUS_COLORS = {
    TaskStatus.SCHEDULED: 'blue',
    TaskStatus.IN_PROGRESS: 'yellow',
    TaskStatus.PARTIAL: 'magenta',
    TaskStatus.COMPLETED: 'green',
    TaskStatus.CANCELLED: 'white',
}

PRIORITY_COLORS = {
    Priority.LOW: 'white',
    Priority.MEDIUM: 'cyan',
    Priority.HIGH: 'yellow',
    Priority.CRITICAL: 'red',
}


def get_project_context() -> tuple[Path, Path]:
    """Get project root and data directory.

    Returns:
        Tuple of (project_root, data_dir)

    Note:
        Does not check if data_dir exists - callers should validate as needed.
    """
    project_root = Path.cwd()
    data_dir = project_root / DATA_DIR_NAME
    return project_root, data_dir


def ensure_initialized(data_dir: Path) -> None:
    """Ensure the tracker has been initialized, exit with error if not.

    Args:
        data_dir: The data directory path to check
    """
    if not data_dir.exists():
        click.echo("No tracker found. Please run 'maintenance-tracker init' first.", err=True)
        sys.exit(1)


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging from the --verbose flag or the project config."""
    if verbose:
        level = logging.DEBUG
    else:
        _, data_dir = get_project_context()
        level_name = ConfigManager(data_dir).get_config().log_level.upper()
        level = getattr(logging, level_name, logging.WARNING)

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def get_task_service() -> TaskService:
    """Initialize a TaskService for the current project.

    Note:
        Exits with an error if the tracker has not been initialized.
    """
    _, data_dir = get_project_context()
    ensure_initialized(data_dir)

    directory = DirectoryManager(data_dir)
    return TaskService(
        storage=TaskStorageManager(data_dir),
        equipment_directory=directory,
        template_directory=directory,
        config=ConfigManager(data_dir).get_config(),
    )


def fail(message: Any) -> None:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def resolve_task_id(service: TaskService, task_id: str) -> TaskRecord:
    """Resolve a task ID with short ID support.

    Args:
        service: The task service
        task_id: Full or partial task ID

    Returns:
        TaskRecord for the resolved task

    Note:
        Exits with error if task not found or multiple matches.
    """
    task = service.storage.load(task_id)
    if task:
        return task

    matching_tasks = [t for t in service.storage.list_tasks() if t.id.startswith(task_id)]
    if len(matching_tasks) == 1:
        return matching_tasks[0]
    if len(matching_tasks) > 1:
        click.echo(f"Error: Multiple tasks found starting with '{task_id}':", err=True)
        for task in matching_tasks:
            click.echo(f"  - {task.id}: {task.title or task.equipment_id}", err=True)
        sys.exit(1)

    fail(f"No task found with ID: {task_id}")


def style_status(status: TaskStatus) -> str:
    """Render a status in its display color."""
    return click.style(status.value.upper(), fg=STATUS_COLORS.get(status, 'white'))


def style_priority(priority: Priority) -> str:
    """Render a priority in its display color."""
    return click.style(priority.value, fg=PRIORITY_COLORS.get(priority, 'white'))


def format_date(value: Optional[date]) -> str:
    """Format a date or datetime for tables, empty when missing."""
    return value.strftime(DATE_FORMAT) if value else ""


def format_task_table(tasks: List[TaskRecord],
                      headers: Optional[List[str]] = None,
                      max_title_length: int = 40) -> str:
    """Format tasks as a table with consistent styling.

    Args:
        tasks: List of tasks to display
        headers: Optional custom headers (defaults to standard headers)
        max_title_length: Maximum title length before truncation

    Returns:
        Formatted table string
    """
    if headers is None:
        headers = ["ID", "STATUS", "PRIORITY", "EQUIPMENT", "TITLE", "SCHEDULED", "REPEATS"]

    table_data = []
    for task_item in tasks:
        title = (task_item.title or task_item.description).split('\n')[0]
        if len(title) > max_title_length:
            title = title[:max_title_length-3] + "..."

        repeats = task_item.frequency.value
        if task_item.custom_days:
            repeats = f"every {task_item.custom_days}d"
        elif repeats == "none":
            repeats = ""

        table_data.append([
            task_item.id[:SHORT_ID_LENGTH],
            style_status(task_item.status),
            style_priority(task_item.priority),
            task_item.equipment_id,
            title,
            format_date(task_item.scheduled_date),
            repeats,
        ])

    return tabulate(table_data, headers=headers, tablefmt="simple")


def print_table(headers: List[str], rows: List[List[Any]],
                tablefmt: str = "simple") -> None:
    """Print a table with project-wide defaults.

    Args:
        headers: Table headers
        rows: Table rows
        tablefmt: Table format (default: "simple")
    """
    table_str = tabulate(rows, headers=headers, tablefmt=tablefmt)
    click.echo(table_str)


__all__ = [
    'get_project_context',
    'ensure_initialized',
    'configure_logging',
    'get_task_service',
    'fail',
    'resolve_task_id',
    'style_status',
    'style_priority',
    'format_date',
    'format_task_table',
    'print_table',
]
