"""Show task command."""

import click

from ...helpers import format_date, get_task_service, resolve_task_id, style_priority, style_status
from ....core.constants import DATETIME_FORMAT


@click.command()
@click.argument('task_id')
@click.option('--history', 'show_history', is_flag=True, help='Show status history')
def show(task_id, show_history):
    """Show detailed information about a task"""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    click.echo("\n" + "=" * 80)
    click.echo(f"Task Details: {task_record.id}")
    click.echo("=" * 80)

    click.echo("\n📋 Basic Information:")
    if task_record.title:
        click.echo(f"   Title: {task_record.title}")
    click.echo(f"   Status: {style_status(task_record.status)}")
    click.echo(f"   Priority: {style_priority(task_record.priority)}")
    click.echo(f"   Type: {task_record.type.value}")
    click.echo(f"   Equipment: {task_record.equipment_id}")
    for label, value in (("Category", task_record.category_id),
                         ("Area", task_record.area_id),
                         ("Line", task_record.line_id),
                         ("Assigned to", task_record.assigned_to),
                         ("Template", task_record.task_template_id),
                         ("Follow-up of", task_record.follow_up_of)):
        if value:
            click.echo(f"   {label}: {value}")

    click.echo("\n📅 Schedule:")
    click.echo(f"   Scheduled: {format_date(task_record.scheduled_date)}")
    if task_record.frequency.value != "none":
        repeats = task_record.frequency.value
        if task_record.custom_days:
            repeats += f" (every {task_record.custom_days} days)"
        click.echo(f"   Repeats: {repeats}")
    if task_record.estimated_duration:
        click.echo(f"   Estimated: {task_record.estimated_duration}h")
    if task_record.completion_date:
        click.echo(f"   Completed: {task_record.completion_date.strftime(DATETIME_FORMAT)}")
        click.echo(f"   Actual: {task_record.actual_duration}h")

    if task_record.description:
        click.echo("\n📄 Description:")
        for line in task_record.description.split('\n'):
            click.echo(f"   {line}")

    if task_record.notes:
        click.echo("\n📝 Notes:")
        for line in task_record.notes.split('\n'):
            click.echo(f"   {line}")

    if show_history:
        entries = service.get_status_history(task_record.id)
        if entries:
            click.echo("\n🕓 Status History:")
            for entry in entries:
                line = f"   {entry.status_date.strftime(DATETIME_FORMAT)}  {style_status(entry.status)}"
                if entry.notes:
                    line += f"  {entry.notes}"
                click.echo(line)
