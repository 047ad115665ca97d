"""Delete task command."""

import click

from ...helpers import fail, get_task_service, resolve_task_id
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError


@click.command()
@click.argument('task_id')
@click.confirmation_option(prompt='Are you sure you want to delete this task?')
def delete(task_id):
    """Delete a task and its status history"""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    try:
        service.delete_task(task_record.id)
    except MaintenanceError as e:
        fail(e)

    click.echo(f"✅ Task {task_record.id[:SHORT_ID_LENGTH]} deleted successfully")
    click.echo(f"   Equipment: {task_record.equipment_id}")
    if task_record.title:
        click.echo(f"   Title: {task_record.title}")
