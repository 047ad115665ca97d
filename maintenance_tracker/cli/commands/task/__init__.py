"""Task command group and sub-commands."""

import click

from .create import create
from .list_tasks import list
from .show import show
from .transitions import start, cancel, reopen, partial
from .complete import complete
from .edit import edit
from .delete import delete
from .history import history
from .search import search
from .import_tasks import import_tasks

__all__ = [
    'task',
    'create',
    'list',
    'show',
    'start',
    'cancel',
    'reopen',
    'partial',
    'complete',
    'edit',
    'delete',
    'history',
    'search',
    'import_tasks',
]


@click.group()
def task():
    """Manage maintenance tasks"""
    pass


# Register all sub-commands
task.add_command(create)
task.add_command(list)
task.add_command(show)
task.add_command(start)
task.add_command(cancel)
task.add_command(reopen)
task.add_command(partial)
task.add_command(complete)
task.add_command(edit)
task.add_command(delete)
task.add_command(history)
task.add_command(search)
task.add_command(import_tasks)
