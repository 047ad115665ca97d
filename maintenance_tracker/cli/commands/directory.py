"""Equipment and task-template directory commands."""

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from ..helpers import ensure_initialized, get_project_context
from ...utils.directory_manager import DirectoryManager


def get_directory_manager() -> DirectoryManager:
    """Directory manager for the current project."""
    _, data_dir = get_project_context()
    ensure_initialized(data_dir)
    return DirectoryManager(data_dir)


@click.group()
def equipment():
    """Manage the equipment directory"""
    pass


@equipment.command(name='add')
@click.argument('equipment_id')
@click.argument('name')
@click.option('--department', 'department_id', help='Department that owns the equipment')
def add_equipment(equipment_id, name, department_id):
    """Register or rename a piece of equipment"""
    manager = get_directory_manager()
    manager.add_equipment(equipment_id, name, department_id)
    click.echo(f"Registered equipment {equipment_id}: {name}")


@equipment.command(name='list')
@click.pass_context
def list_equipment(ctx):
    """List registered equipment"""
    console = Console()
    try:
        items = get_directory_manager().list_equipment()
    except ValueError as e:
        console.print(f"[red]Error loading directory: {e}[/red]")
        ctx.exit(1)

    if not items:
        console.print("[yellow]No equipment registered.[/yellow]")
        console.print("Use 'maintenance-tracker equipment add' to register equipment.")
        return

    table = Table(title="Equipment")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Department", style="white")
    for item in items:
        table.add_row(item.id, item.name, item.department_id or "")
    console.print(table)


@equipment.command(name='remove')
@click.argument('equipment_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
def remove_equipment(equipment_id, yes):
    """Remove a piece of equipment from the directory"""
    console = Console()
    manager = get_directory_manager()

    if not manager.lookup(equipment_id):
        console.print(f"[yellow]Equipment '{equipment_id}' not found[/yellow]")
        return

    if not yes and not Confirm.ask(f"Remove equipment '{equipment_id}'?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    manager.remove_equipment(equipment_id)
    console.print(f"[green]Removed equipment '{equipment_id}'[/green]")


@click.group()
def template():
    """Manage reusable task templates"""
    pass


@template.command(name='add')
@click.argument('template_id')
@click.argument('name')
@click.option('--description', default="", help='Description copied into new tasks')
def add_template(template_id, name, description):
    """Register or update a task template"""
    manager = get_directory_manager()
    manager.add_template(template_id, name, description)
    click.echo(f"Registered template {template_id}: {name}")


@template.command(name='list')
@click.pass_context
def list_templates(ctx):
    """List task templates"""
    console = Console()
    try:
        items = get_directory_manager().list_templates()
    except ValueError as e:
        console.print(f"[red]Error loading directory: {e}[/red]")
        ctx.exit(1)

    if not items:
        console.print("[yellow]No task templates registered.[/yellow]")
        return

    table = Table(title="Task Templates")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Description", style="white")
    for item in items:
        table.add_row(item.id, item.name, item.description)
    console.print(table)


@template.command(name='remove')
@click.argument('template_id')
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
def remove_template(template_id, yes):
    """Remove a task template"""
    console = Console()
    manager = get_directory_manager()

    if not manager.lookup_template(template_id):
        console.print(f"[yellow]Template '{template_id}' not found[/yellow]")
        return

    if not yes and not Confirm.ask(f"Remove template '{template_id}'?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    manager.remove_template(template_id)
    console.print(f"[green]Removed template '{template_id}'[/green]")
