"""Workspace scan command."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.table import Table

from ..console import console
from ..lib.references import scan_workspace
from ..lib.references.workspace import DEFAULT_EXCLUDE
from ..lib.references.workspace import DEFAULT_PATTERNS
from ..utils.error_format import escape_markup


@click.command("scan")
@click.argument("directory", required=False, type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--pattern", "-p", "patterns", multiple=True, help="File name glob (repeatable)")
@click.option("--exclude", "-x", "exclude", multiple=True, help="Directory name to skip (repeatable)")
@click.option("--json", "as_json", is_flag=True, help="Print one JSON object per reference")
def scan_cmd(directory: Path | None, patterns: tuple[str, ...], exclude: tuple[str, ...], as_json: bool):
    """List every reference found in the files under DIRECTORY (default: current directory).

    Lines and columns are 1-based in the output.
    """
    base = (directory or Path.cwd()).resolve()
    found = list(scan_workspace(base, patterns or DEFAULT_PATTERNS, exclude or DEFAULT_EXCLUDE))

    if as_json:
        for item in found:
            record = {
                "file": item.file.relative_to(base).as_posix(),
                "line": item.line + 1,
                "column": item.start + 1,
                "reference": item.reference.raw,
                "kind": item.reference.kind.value,
            }
            click.echo(json.dumps(record))
        return

    if not found:
        console.print("[dim]No references found[/dim]")
        return

    table = Table(title=f"References in {escape_markup(base)}", show_header=True, header_style="bold")
    table.add_column("Location", style="cyan")
    table.add_column("Reference", style="green")
    table.add_column("Kind")
    for item in found:
        location = f"{item.file.relative_to(base).as_posix()}:{item.line + 1}:{item.start + 1}"
        table.add_row(escape_markup(location), escape_markup(item.reference.raw), item.reference.kind.value)
    console.print(table)
    files = len({item.file for item in found})
    console.print(f"\n[dim]{len(found)} reference(s) in {files} file(s)[/dim]")
