"""Root management commands."""

from __future__ import annotations

import sys

import click
from rich.table import Table

from ..console import console
from ..console import error_console
from ..paths import create_settings_manager
from ..paths import resolve_roots
from ..settings import SCOPES
from ..settings import SettingsError
from ..ui import display_error
from ..utils.error_format import escape_markup

SCOPE_FILES = {
    "user": "~/.incontext/settings.yaml",
    "project": ".incontext/settings.yaml",
    "local": ".incontext/settings.local.yaml",
}


@click.group(invoke_without_command=True)
@click.pass_context
def roots(ctx: click.Context):
    """Manage the named roots references resolve against."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@roots.command(name="list")
@click.pass_context
def roots_list(ctx: click.Context):
    """Show the effective roots in resolution order."""
    try:
        effective = resolve_roots(ctx.obj["roots"])
    except (SettingsError, ValueError) as e:
        display_error(error_console, e)
        sys.exit(1)

    table = Table(title="Roots", show_header=True, header_style="bold cyan")
    table.add_column("Name", style="green")
    table.add_column("Path")
    table.add_column("Default")
    for index, root in enumerate(effective):
        table.add_row(escape_markup(root.name), escape_markup(root.base_path), "✓" if index == 0 else "")
    console.print(table)
    console.print("\n[dim]Unknown root names in a reference resolve under the default root.[/dim]")


@roots.command(name="add")
@click.argument("name")
@click.argument("path", type=click.Path(exists=True, file_okay=False))
@click.option("--scope", type=click.Choice(SCOPES), default="project", help="Settings scope to write")
def roots_add(name: str, path: str, scope: str):
    """Add (or replace) a named root.

    Examples:
      incontext roots add web ../web
      incontext roots add notes ~/notes --scope user
    """
    if "/" in name:
        error_console.print("[red]Error:[/red] Root names cannot contain '/'")
        sys.exit(1)
    try:
        create_settings_manager().add_root(name, path, scope=scope)
    except (SettingsError, ValueError, OSError) as e:
        display_error(error_console, e)
        sys.exit(1)

    console.print(f"[green]✓ Added root '{escape_markup(name)}'[/green]")
    console.print(f"  File: {SCOPE_FILES[scope]}")


@roots.command(name="remove")
@click.argument("name")
@click.option("--scope", type=click.Choice(SCOPES), default="project", help="Settings scope to edit")
def roots_remove(name: str, scope: str):
    """Remove a named root from a settings scope."""
    try:
        removed = create_settings_manager().remove_root(name, scope=scope)
    except (SettingsError, OSError) as e:
        display_error(error_console, e)
        sys.exit(1)

    if removed:
        console.print(f"[green]✓ Removed root '{escape_markup(name)}'[/green]")
    else:
        console.print(f"[yellow]No root '{escape_markup(name)}' in {SCOPE_FILES[scope]}[/yellow]")
