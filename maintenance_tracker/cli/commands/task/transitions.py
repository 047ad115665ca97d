"""Status change commands: start, cancel, reopen and partial."""

import click

from ...helpers import fail, get_task_service, resolve_task_id, style_status
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError
from ....models.task import TaskStatus


def apply_transition(task_id, target, notes=None):
    """Move a task to ``target`` and report the new status."""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    patch = {"status": target.value}
    if notes is not None:
        patch["notes"] = notes

    try:
        updated = service.update_task(task_record.id, patch)
    except MaintenanceError as e:
        fail(e)

    click.echo(f"Task {updated.id[:SHORT_ID_LENGTH]} is now {style_status(updated.status)}")


@click.command()
@click.argument('task_id')
def start(task_id):
    """Mark a task as in progress"""
    apply_transition(task_id, TaskStatus.IN_PROGRESS)


@click.command()
@click.argument('task_id')
def cancel(task_id):
    """Cancel a task"""
    apply_transition(task_id, TaskStatus.CANCELLED)


@click.command()
@click.argument('task_id')
def reopen(task_id):
    """Resume work on a partially completed task"""
    apply_transition(task_id, TaskStatus.IN_PROGRESS)


@click.command()
@click.argument('task_id')
@click.option('--notes', '-n', required=True, help='What was done and what remains')
def partial(task_id, notes):
    """Record a task as partially completed"""
    apply_transition(task_id, TaskStatus.PARTIAL, notes)
