"""Rich rendering of references and content payloads for the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text

from ..lib.references import BinaryContent
from ..lib.references import ContentPayload
from ..lib.references import DirectoryContent
from ..lib.references import ImageContent
from ..lib.references import Span
from ..lib.references import SpanRole
from ..lib.references import TextContent
from ..lib.references import calculate_spans
from ..lib.references import find_references
from ..utils.error_format import escape_markup

COLLAPSED_MARKER = "..."


def line_spans(line: str) -> list[Span]:
    """All spans for every parseable reference on a line, in order."""
    spans: list[Span] = []
    for located in find_references(line):
        spans.extend(calculate_spans(located.reference, located.start))
    return spans


def render_reference_line(line: str, compact: bool = True) -> Text:
    """Render a line with its references emphasized.

    Args:
        line: Line of text
        compact: Replace de-emphasized middles with "..." instead of dimming them

    Examples:
        >>> render_reference_line("see @proj/src/lib/util.ts").plain
        'see @proj/.../util.ts'
    """
    text = Text()
    cursor = 0
    for span in line_spans(line):
        text.append(line[cursor : span.start_offset])
        segment = line[span.start_offset : span.end_offset]
        if span.role == SpanRole.DEEMPHASIZE:
            text.append(COLLAPSED_MARKER if compact else segment, style="ref.deemphasize")
        else:
            text.append(segment, style="ref.emphasize")
        cursor = span.end_offset
    text.append(line[cursor:])
    return text


def _lexer_for(payload: TextContent) -> str:
    ext = payload.path.suffix.lstrip(".")
    return ext if ext.isalnum() else "text"


def render_payload(payload: ContentPayload, console: Console) -> None:
    """Print a content payload: listings and summaries as text, files highlighted."""
    if isinstance(payload, DirectoryContent):
        console.print(f"[bold]Contents of[/bold] {escape_markup(payload.reference)}", highlight=False)
        if not payload.entries:
            console.print("[dim](empty)[/dim]")
        for entry in payload.entries:
            if entry.is_directory:
                console.print(f"  [cyan]{escape_markup(entry.name)}/[/cyan]", highlight=False)
            else:
                console.print(f"  {escape_markup(entry.name)}", highlight=False)
        return

    if isinstance(payload, TextContent):
        if payload.excerpt is not None:
            console.print(
                f"[bold]Preview of[/bold] {escape_markup(payload.reference)} [dim](lines {payload.line_start}-{payload.line_end})[/dim]",
                highlight=False,
            )
            body = payload.excerpt
            start_line = payload.line_start or 1
        else:
            console.print(
                f"[bold]{escape_markup(payload.reference)}[/bold] [dim]({payload.line_count} lines)[/dim]",
                highlight=False,
            )
            body = payload.content
            start_line = 1
        console.print(Syntax(body, _lexer_for(payload), line_numbers=True, start_line=start_line))
        return

    if isinstance(payload, (ImageContent, BinaryContent)):
        console.print(Text(payload.text))
