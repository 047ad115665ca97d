"""Main CLI entry point for Maintenance Tracker."""

import click

from .helpers import configure_logging
from .commands.init import init
from .commands.task import task
from .commands.alerts import alerts
from .commands.directory import equipment, template
from .commands.config import config


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """Maintenance Tracker - Schedule and track equipment maintenance tasks"""
    configure_logging(verbose)


# Register commands
cli.add_command(init)
cli.add_command(task)
cli.add_command(alerts)
cli.add_command(equipment)
cli.add_command(template)
cli.add_command(config)


if __name__ == '__main__':
    cli()
