"""Complete task command."""

import click

from ...helpers import fail, format_date, get_task_service, resolve_task_id
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError


@click.command()
@click.argument('task_id')
@click.option('--duration', '-d', 'actual_duration', type=float, required=True,
              help='Hours actually spent')
@click.option('--notes', '-n', help='Completion notes')
def complete(task_id, actual_duration, notes):
    """Mark a task completed and schedule its next occurrence"""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    try:
        result = service.complete_task(task_record.id, actual_duration, notes)
    except MaintenanceError as e:
        fail(e)

    click.echo(f"✅ Task {result.task.id[:SHORT_ID_LENGTH]} completed ({result.task.actual_duration}h)")

    if result.follow_up:
        click.echo(f"🔁 Next occurrence {result.follow_up.id[:SHORT_ID_LENGTH]} "
                   f"scheduled for {format_date(result.follow_up.scheduled_date)}")
    elif result.follow_up_error:
        click.echo(f"⚠️  Warning: Could not schedule the next occurrence: {result.follow_up_error}", err=True)
