"""Command line commands."""

from .logs import logs_cmd
from .resolve import ref_cmd
from .resolve import resolve_cmd
from .resolve import spans_cmd
from .roots import roots
from .scan import scan_cmd
from .serve import serve_cmd

__all__ = ["logs_cmd", "ref_cmd", "resolve_cmd", "roots", "scan_cmd", "serve_cmd", "spans_cmd"]
