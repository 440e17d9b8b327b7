"""Tool server command."""

import sys

import click

from ..console import error_console
from ..logging_setup import init_json_logging
from ..mcp_server import run_server
from ..paths import create_engine
from ..settings import SettingsError
from ..ui import display_error


@click.command("serve")
@click.pass_context
def serve_cmd(ctx: click.Context):
    """Serve reference resolution to MCP clients over stdio.

    Logs go to the JSONL sink; stdout carries the protocol.
    """
    if not ctx.obj.get("logging_configured"):
        init_json_logging()
    try:
        engine = create_engine(ctx.obj["roots"])
    except (SettingsError, ValueError) as e:
        display_error(error_console, e)
        sys.exit(1)
    run_server(engine)
