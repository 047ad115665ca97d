"""List tasks command."""

import click

from ...helpers import fail, format_task_table, get_project_context, get_task_service
from ....exceptions import MaintenanceError
from ....models.task import Priority, TaskStatus

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])


@click.command()
@click.option('--status', type=click.Choice([s.value for s in TaskStatus]),
              help='Filter by task status')
@click.option('--equipment', '-e', 'equipment_id', help='Filter by equipment ID')
@click.option('--priority', '-p', type=click.Choice([p.value for p in Priority]),
              help='Filter by priority')
@click.option('--assigned-to', '-a', help='Filter by assignee')
@click.option('--from', 'start_date', type=DATE_TYPE, help='Scheduled on or after (YYYY-MM-DD)')
@click.option('--to', 'end_date', type=DATE_TYPE, help='Scheduled on or before (YYYY-MM-DD)')
def list(status, equipment_id, priority, assigned_to, start_date, end_date):
    """List maintenance tasks ordered by due date"""
    project_root, _ = get_project_context()
    service = get_task_service()

    try:
        tasks = service.list_tasks(
            status=status,
            equipment_id=equipment_id,
            priority=priority,
            assigned_to=assigned_to,
            start_date=start_date.date() if start_date else None,
            end_date=end_date.date() if end_date else None,
        )
    except MaintenanceError as e:
        fail(e)

    if not tasks:
        click.echo(f"\nNo tasks found for project '{project_root.name}'")
        return

    click.echo(f"\n📋 Maintenance tasks for project '{project_root.name}':")
    click.echo(format_task_table(tasks))
    click.echo(f"\n{len(tasks)} task(s)")
