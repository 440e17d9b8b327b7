"""Error display for reference resolution failures."""

from rich.console import Console

from ..lib.references import MalformedReferenceError
from ..lib.references import ReferenceNotFoundError
from ..lib.references import ReferenceParseError
from ..lib.references import ReferenceReadError
from ..utils.error_format import escape_markup
from ..utils.error_format import format_error_message


def error_hint(error: BaseException) -> str | None:
    """Short remediation hint for known engine errors."""
    if isinstance(error, ReferenceNotFoundError):
        return "Check the root name: unknown names resolve under the default root (see `incontext roots list`)."
    if isinstance(error, MalformedReferenceError):
        return "Line ranges are written :L<start> or :L<start>:<end>, e.g. @proj/a.ts:L10:20."
    if isinstance(error, ReferenceParseError):
        return "References look like @project/path/to/file or @project/dir/."
    if isinstance(error, ReferenceReadError):
        return "The path exists but could not be read; check permissions and encoding."
    return None


def display_error(console: Console, error: BaseException) -> None:
    """Print an error and its hint (if any) with markup-safe formatting."""
    console.print(f"[red]Error:[/red] {escape_markup(format_error_message(error))}")
    hint = error_hint(error)
    if hint:
        console.print(f"[dim]{escape_markup(hint)}[/dim]")
