"""Initialize a maintenance tracker in the current project."""

import click

from ..helpers import get_project_context
from ...core.task_storage import TaskStorageManager
from ...utils.config_manager import ConfigManager


@click.command()
def init():
    """Create the tracker data directory with default configuration"""
    project_root, data_dir = get_project_context()

    if data_dir.exists():
        click.echo(f"Tracker already initialized in {data_dir}")
        return

    TaskStorageManager(data_dir)
    config_manager = ConfigManager(data_dir)
    config_manager.save_config(config_manager.get_config())

    click.echo(f"✅ Initialized maintenance tracker for '{project_root.name}'")
    click.echo("   Register equipment with 'maintenance-tracker equipment add'.")
