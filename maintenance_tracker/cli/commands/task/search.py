"""Search tasks command."""

import click

from ...helpers import format_task_table, get_task_service


@click.command()
@click.argument('query')
def search(query):
    """Search tasks by title, description and notes"""
    service = get_task_service()

    matching_tasks = service.search_tasks(query)

    if not matching_tasks:
        click.echo(f"\nNo tasks found matching '{query}'")
        return

    click.echo(f"\n📋 Tasks matching '{query}':")
    click.echo(format_task_table(matching_tasks))
    click.echo(f"\nFound {len(matching_tasks)} matching task(s)")
