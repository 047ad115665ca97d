"""Task status history command."""

import click

from ...helpers import get_task_service, print_table, resolve_task_id, style_status
from ....core.constants import DATETIME_FORMAT, SHORT_ID_LENGTH


@click.command()
@click.argument('task_id')
def history(task_id):
    """Show the status history of a task"""
    service = get_task_service()
    task_record = resolve_task_id(service, task_id)

    entries = service.get_status_history(task_record.id)
    if not entries:
        click.echo(f"\nNo status history for task {task_record.id[:SHORT_ID_LENGTH]}")
        return

    click.echo(f"\n🕓 Status history for task {task_record.id[:SHORT_ID_LENGTH]}:")
    rows = [
        [entry.status_date.strftime(DATETIME_FORMAT), style_status(entry.status), entry.notes or "-"]
        for entry in entries
    ]
    print_table(["DATE", "STATUS", "NOTES"], rows)
