"""Bulk-import tasks from a YAML file."""

import sys

import click
import yaml

from ...helpers import fail, get_task_service
from ....core.constants import SHORT_ID_LENGTH
from ....exceptions import MaintenanceError


def load_task_inputs(path):
    """Read a YAML file holding a list of task mappings.

    The file may be a bare list or a mapping with a ``tasks`` key.
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    if isinstance(data, dict):
        data = data.get('tasks')
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise ValueError("Expected a list of task mappings")
    return data


@click.command(name='import')
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--stop-on-error', is_flag=True, help='Abort on the first invalid task')
def import_tasks(path, stop_on_error):
    """Create tasks from a YAML file"""
    service = get_task_service()

    try:
        items = load_task_inputs(path)
    except (yaml.YAMLError, ValueError) as e:
        fail(f"Invalid task file {path}: {e}")

    created = 0
    failed = 0
    for index, item in enumerate(items, 1):
        try:
            task_record = service.create_task(item)
        except MaintenanceError as e:
            failed += 1
            click.echo(f"❌ Entry {index}: {e}", err=True)
            if stop_on_error:
                fail(f"Stopped after {created} task(s) were created")
            continue
        created += 1
        click.echo(f"✅ Entry {index}: task {task_record.id[:SHORT_ID_LENGTH]} "
                   f"for {task_record.equipment_id} on {task_record.scheduled_date}")

    click.echo(f"\nImported {created} task(s), {failed} failed")
    if failed:
        sys.exit(1)
