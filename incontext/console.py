"""Shared Rich console instances for CLI output."""

from rich.console import Console
from rich.theme import Theme

# Colors for the parts of a compactly rendered reference
REFERENCE_THEME = Theme(
    {
        "ref.emphasize": "bold cyan",
        "ref.deemphasize": "dim italic",
        "ref.plain": "default",
    }
)

console = Console(theme=REFERENCE_THEME)
error_console = Console(stderr=True, theme=REFERENCE_THEME)

__all__ = ["console", "error_console", "REFERENCE_THEME"]
