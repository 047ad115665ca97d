"""Create task command."""

import sys

import click
import questionary

from ...helpers import fail, format_date, get_task_service
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError
from ....models.task import Frequency, Priority, TaskType

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


def prompt_schedule_details(task_type, priority, frequency, custom_days):
    """Ask for type, priority and recurrence with interactive selects."""
    task_type = questionary.select(
        "Task type:", choices=[t.value for t in TaskType], default=task_type
    ).ask()
    priority = questionary.select(
        "Priority:", choices=[p.value for p in Priority], default=priority
    ).ask()
    frequency = questionary.select(
        "Repeats:", choices=[f.value for f in Frequency], default=frequency
    ).ask()
    if None in (task_type, priority, frequency):
        click.echo("Cancelled.")
        sys.exit(1)

    if frequency == Frequency.CUSTOM.value:
        answer = questionary.text(
            "Repeat every how many days?",
            default=str(custom_days or ""),
            validate=lambda text: text.isdigit() and int(text) > 0,
        ).ask()
        if answer is None:
            click.echo("Cancelled.")
            sys.exit(1)
        custom_days = int(answer)
    else:
        custom_days = None

    return task_type, priority, frequency, custom_days


@click.command()
@click.option('--equipment', '-e', 'equipment_id', required=True, help='Equipment the task maintains')
@click.option('--date', '-d', 'scheduled_date', type=DATE_TYPE, required=True, help='Due date (YYYY-MM-DD)')
@click.option('--title', '-t', help='Short task title')
@click.option('--description', help='Task description')
@click.option('--type', 'task_type', type=click.Choice([t.value for t in TaskType]),
              default=TaskType.PREDICTIVE.value, show_default=True, help='Kind of maintenance')
@click.option('--priority', '-p', type=click.Choice([p.value for p in Priority]),
              default=Priority.MEDIUM.value, show_default=True, help='Task priority')
@click.option('--frequency', '-f', type=click.Choice([f.value for f in Frequency]),
              default=Frequency.NONE.value, show_default=True, help='How often the task repeats')
@click.option('--custom-days', type=int, help='Repeat interval in days for a custom frequency')
@click.option('--template', 'task_template_id', help='Task template to copy title and description from')
@click.option('--assigned-to', '-a', help='Technician responsible for the task')
@click.option('--estimated-duration', type=float, help='Estimated hours of work')
@click.option('--category', 'category_id', help='Category ID')
@click.option('--area', 'area_id', help='Area ID')
@click.option('--line', 'line_id', help='Production line ID')
@click.option('--notes', help='Notes')
@click.option('--interactive', '-i', is_flag=True, help='Choose type, priority and recurrence interactively')
def create(equipment_id, scheduled_date, title, description, task_type, priority, frequency,
           custom_days, task_template_id, assigned_to, estimated_duration, category_id,
           area_id, line_id, notes, interactive):
    """Schedule a new maintenance task"""
    service = get_task_service()

    if interactive:
        task_type, priority, frequency, custom_days = prompt_schedule_details(
            task_type, priority, frequency, custom_days
        )

    data = {
        "equipment_id": equipment_id,
        "scheduled_date": scheduled_date.date(),
        "title": title,
        "description": description,
        "type": task_type,
        "priority": priority,
        "frequency": frequency,
        "custom_days": custom_days,
        "task_template_id": task_template_id,
        "assigned_to": assigned_to,
        "estimated_duration": estimated_duration,
        "category_id": category_id,
        "area_id": area_id,
        "line_id": line_id,
        "notes": notes,
    }

    try:
        task_record = service.create_task(data)
    except MaintenanceError as e:
        fail(e)

    click.echo(f"✅ Task {task_record.id[:SHORT_ID_LENGTH]} scheduled")
    click.echo(f"   Equipment: {task_record.equipment_id}")
    click.echo(f"   Due: {format_date(task_record.scheduled_date)}")
    if task_record.title:
        click.echo(f"   Title: {task_record.title}")
