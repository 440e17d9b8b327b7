"""Reference commands: resolve content, show spans, format paths as references."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.table import Table

from ..console import console
from ..console import error_console
from ..lib.references import ReferenceNotationError
from ..lib.references import SpanRole
from ..lib.references import calculate_spans
from ..lib.references import find_references
from ..lib.references import payload_to_wire
from ..paths import create_engine
from ..settings import SettingsError
from ..ui import display_error
from ..ui import render_payload
from ..ui import render_reference_line
from ..utils.error_format import escape_markup

logger = logging.getLogger(__name__)


def parse_lines_option(value: str) -> tuple[int, int]:
    """Parse ``S`` or ``S:E`` into a 1-based inclusive range.

    Raises:
        click.BadParameter: Not numeric, not 1-based, or end before start
    """
    start_text, _, end_text = value.partition(":")
    try:
        start = int(start_text)
        end = int(end_text) if end_text else start
    except ValueError as e:
        raise click.BadParameter(f"Expected S or S:E, got: {value}") from e
    if start < 1 or end < start:
        raise click.BadParameter(f"Invalid line range: {value}")
    return start, end


@click.command("resolve")
@click.argument("reference")
@click.option("--json", "as_json", is_flag=True, help="Print the wire payload as JSON")
@click.pass_context
def resolve_cmd(ctx: click.Context, reference: str, as_json: bool):
    """Resolve a reference and print its content.

    Examples:
      incontext resolve @web/src/app.ts
      incontext resolve @web/src/app.ts:L10:20
      incontext resolve @web/docs/ --json
    """
    try:
        engine = create_engine(ctx.obj["roots"])
        payload = engine.resolve_reference(reference)
    except (ReferenceNotationError, SettingsError, ValueError) as e:
        logger.warning(f"Failed to resolve {reference}: {e}")
        display_error(error_console, e)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(payload_to_wire(payload), indent=2))
        return
    render_payload(payload, console)


@click.command("spans")
@click.argument("line")
@click.option("--full", is_flag=True, help="Dim collapsed path segments instead of replacing them")
def spans_cmd(line: str, full: bool):
    """Show how the references in a line of text are decorated."""
    located = list(find_references(line))
    if not located:
        console.print("[dim]No references found[/dim]")
        return

    console.print(render_reference_line(line, compact=not full))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Reference", style="cyan")
    table.add_column("Range", no_wrap=True)
    table.add_column("Role", no_wrap=True)
    table.add_column("Annotation")
    for found in located:
        for span in calculate_spans(found.reference, found.start):
            role_style = "ref.emphasize" if span.role == SpanRole.EMPHASIZE else "ref.deemphasize"
            table.add_row(
                escape_markup(found.reference.raw),
                f"{span.start_offset}-{span.end_offset}",
                f"[{role_style}]{span.role.value}[/{role_style}]",
                escape_markup(span.annotation),
            )
    console.print(table)


@click.command("ref")
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--lines", "lines", default=None, metavar="S[:E]", help="1-based inclusive line range")
@click.option("--dir", "directory", is_flag=True, help="Format as a directory reference (implied for directories)")
@click.pass_context
def ref_cmd(ctx: click.Context, path: Path, lines: str | None, directory: bool):
    """Print the reference text for a file or directory.

    Examples:
      incontext ref src/app.ts
      incontext ref src/app.ts --lines 10:20
      incontext ref docs --dir
    """
    absolute = path.resolve()
    directory = directory or absolute.is_dir()
    line_start = line_end = None
    if lines is not None:
        line_start, line_end = parse_lines_option(lines)

    try:
        engine = create_engine(ctx.obj["roots"])
        text = engine.format_reference(absolute, line_start, line_end, directory)
    except (SettingsError, ValueError) as e:
        display_error(error_console, e)
        sys.exit(1)

    if text is None:
        error_console.print(f"[red]Error:[/red] {escape_markup(absolute)} is not inside any root")
        error_console.print("[dim]Add one with: incontext roots add NAME PATH[/dim]")
        sys.exit(1)
    click.echo(text)
