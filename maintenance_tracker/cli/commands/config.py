"""Configuration management commands for Maintenance Tracker."""

import json

import click

from ..helpers import fail, get_project_context
from ...exceptions import ValidationError
from ...utils.config_manager import ConfigManager


@click.group()
def config():
    """Manage tracker configuration"""
    pass


@config.command()
def show():
    """Display current tracker configuration"""
    _, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)

    click.echo("Tracker Configuration:")
    click.echo(json.dumps(config_manager.get_config().model_dump(), indent=2))


@config.command(name='set')
@click.argument('key')
@click.argument('value')
def set_value(key, value):
    """Set a configuration value (e.g. horizon_days 5)"""
    _, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)

    try:
        updated = config_manager.update(**{key: value})
    except ValidationError as e:
        fail(e)

    click.echo(f"Set {key} = {getattr(updated, key)}")


@config.command()
def reset():
    """Reset tracker configuration to defaults"""
    _, data_dir = get_project_context()
    config_manager = ConfigManager(data_dir)

    config_manager.reset()
    click.echo("Configuration reset to defaults")
