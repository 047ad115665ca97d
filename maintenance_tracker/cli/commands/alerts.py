"""Maintenance alerts command."""

import click
from rich.console import Console
from rich.table import Table

from ..helpers import get_task_service
from ...core.alerts import summarize
from ...core.constants import SHORT_ID_LENGTH
from ...models.alert import AlertBucket

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])

BUCKET_STYLES = {
    AlertBucket.OVERDUE: "red",
    AlertBucket.TODAY: "yellow",
    AlertBucket.UPCOMING: "cyan",
}


@click.command()
@click.option('--date', '-d', 'reference_date', type=DATE_TYPE, help='Classify as of this day (YYYY-MM-DD)')
@click.option('--horizon', type=click.IntRange(min=0), help='Days ahead that count as upcoming')
def alerts(reference_date, horizon):
    """Show overdue, due-today and upcoming tasks"""
    console = Console()
    service = get_task_service()

    alert_list = service.list_alerts(
        reference_date=reference_date.date() if reference_date else None,
        horizon_days=horizon,
    )

    if not alert_list:
        console.print("[green]No maintenance alerts.[/green]")
        return

    table = Table(title="Maintenance Alerts")
    table.add_column("Bucket", no_wrap=True)
    table.add_column("Task", style="cyan", no_wrap=True)
    table.add_column("Equipment", style="white")
    table.add_column("Title", style="white")
    table.add_column("Priority", style="white")
    table.add_column("Due", style="white", no_wrap=True)

    for alert in alert_list:
        task_record = service.storage.load(alert.task_id)
        style = BUCKET_STYLES[alert.bucket]
        table.add_row(
            f"[{style}]{alert.bucket.value.upper()}[/{style}]",
            alert.task_id[:SHORT_ID_LENGTH],
            task_record.equipment_id if task_record else "",
            task_record.title if task_record else "",
            task_record.priority.value if task_record else "",
            alert.scheduled_date.isoformat(),
        )

    console.print(table)

    counts = summarize(alert_list)
    console.print(", ".join(
        f"[{BUCKET_STYLES[bucket]}]{bucket.value}: {count}[/{BUCKET_STYLES[bucket]}]"
        for bucket, count in counts.items()
    ))
