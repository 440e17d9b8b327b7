"""InContext CLI - resolve @project/path references from the command line."""

import logging

import click

from . import __version__
from .commands import logs_cmd
from .commands import ref_cmd
from .commands import resolve_cmd
from .commands import roots
from .commands import scan_cmd
from .commands import serve_cmd
from .commands import spans_cmd
from .logging_setup import init_json_logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="incontext")
@click.option(
    "--root",
    "root_options",
    multiple=True,
    metavar="NAME=PATH",
    help="Named root for this invocation (repeatable; replaces configured roots, first is default)",
)
@click.option("--log-file", default=None, type=click.Path(dir_okay=False), help="Write JSONL logs to this file")
@click.option("--log-level", default=None, type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Log level")
@click.pass_context
def cli(ctx: click.Context, root_options: tuple[str, ...], log_file: str | None, log_level: str | None):
    """InContext - @project/path references for text and tools."""
    ctx.ensure_object(dict)
    ctx.obj["roots"] = root_options
    ctx.obj["logging_configured"] = False
    if log_file or log_level:
        init_json_logging(log_file, log_level)
        ctx.obj["logging_configured"] = True
        logger.debug(f"Command line roots: {list(root_options)}")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()


cli.add_command(resolve_cmd)
cli.add_command(spans_cmd)
cli.add_command(ref_cmd)
cli.add_command(scan_cmd)
cli.add_command(roots)
cli.add_command(serve_cmd)
cli.add_command(logs_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
