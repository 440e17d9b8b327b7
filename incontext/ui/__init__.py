"""Terminal rendering for the command line."""

from .error_display import display_error
from .render import render_payload
from .render import render_reference_line

__all__ = ["display_error", "render_payload", "render_reference_line"]
