"""Edit task command."""

import click

from ...helpers import fail, get_task_service, resolve_task_id
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError
from ....models.task import Frequency, Priority

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


@click.command()
@click.argument('task_id')
@click.option('--date', '-d', 'scheduled_date', type=DATE_TYPE, help='New due date (YYYY-MM-DD)')
@click.option('--title', '-t', help='New title')
@click.option('--description', help='New description')
@click.option('--priority', '-p', type=click.Choice([p.value for p in Priority]), help='New priority')
@click.option('--frequency', '-f', type=click.Choice([f.value for f in Frequency]), help='New recurrence')
@click.option('--custom-days', type=int, help='Repeat interval in days for a custom frequency')
@click.option('--assigned-to', '-a', help='New assignee')
@click.option('--estimated-duration', type=float, help='Estimated hours of work')
@click.option('--equipment', '-e', 'equipment_id', help='Move the task to other equipment')
@click.option('--notes', '-n', help='Replace notes')
def edit(task_id, scheduled_date, title, description, priority, frequency, custom_days,
         assigned_to, estimated_duration, equipment_id, notes):
    """Change details of an open task"""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    patch = {
        "scheduled_date": scheduled_date.date() if scheduled_date else None,
        "title": title,
        "description": description,
        "priority": priority,
        "frequency": frequency,
        "custom_days": custom_days,
        "assigned_to": assigned_to,
        "estimated_duration": estimated_duration,
        "equipment_id": equipment_id,
        "notes": notes,
    }
    patch = {key: value for key, value in patch.items() if value is not None}

    if not patch:
        click.echo("Nothing to change.")
        return

    try:
        updated = service.update_task(task_record.id, patch)
    except MaintenanceError as e:
        fail(e)

    click.echo(f"✅ Task {updated.id[:SHORT_ID_LENGTH]} updated: {', '.join(sorted(patch))}")
