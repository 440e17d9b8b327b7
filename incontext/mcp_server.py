"""MCP server exposing reference resolution to LLM hosts.

Tool:
- resolve_incontext_reference(reference) - load the file, directory listing or
  image behind an @project/path reference

Resource:
- incontext://{reference} - same payload; the reference is percent-encoded
  because template parameters cannot contain '/'
  (e.g. incontext://%40proj%2Fsrc%2Fa.ts)

Payloads are the JSON wire form of the content union: type, reference, path,
type-specific fields and a human-readable ``text`` summary.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import unquote

from mcp.server.fastmcp import FastMCP

from .lib.references import ReferenceEngine
from .lib.references import ReferenceNotationError
from .lib.references import payload_to_wire

logger = logging.getLogger(__name__)

SERVER_NAME = "incontext-server"
TOOL_NAME = "resolve_incontext_reference"

INSTRUCTIONS = """Resolve @project/path references found in user text.

References look like @project/src/file.ts, @project/src/file.ts:L10:20
(1-based inclusive line range) or @project/docs/ (directory). The first
segment names a workspace root; unknown names fall back to the default root.
"""


def resolve_to_wire(engine: ReferenceEngine, reference: str) -> dict[str, Any]:
    """Resolve a reference and return its wire payload.

    Raises:
        ValueError: reference is empty
        ReferenceNotationError: parse, not-found or read failure
    """
    if not reference or not reference.strip():
        raise ValueError("Reference parameter is required")
    try:
        payload = engine.resolve_reference(reference)
    except ReferenceNotationError as e:
        logger.warning(f"Failed to resolve {reference}: {e}")
        raise
    logger.info(f"Resolved {reference} as {payload.type}")
    return payload_to_wire(payload)


def create_server(engine: ReferenceEngine) -> FastMCP:
    """Create the MCP server bound to an engine.

    Args:
        engine: ReferenceEngine holding the workspace roots

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)

    @mcp.tool(name=TOOL_NAME)
    def resolve_incontext_reference(reference: str) -> str:
        """
        Resolve @project/path references to actual file content.

        Text files are returned verbatim (with the selected lines when the
        reference carries :L<start>:<end>), images and other binaries as
        base64, directories as a listing of their immediate entries.

        Args:
            reference: The @project/path reference to resolve (e.g. @incontext/media/new.png)

        Returns:
            JSON payload with type, reference, path and content fields
        """
        return json.dumps(resolve_to_wire(engine, reference), indent=2)

    @mcp.resource("incontext://{reference}", mime_type="application/json")
    def reference_resource(reference: str) -> str:
        """Content behind a percent-encoded @project/path reference."""
        return json.dumps(resolve_to_wire(engine, unquote(reference)), indent=2)

    return mcp


def run_server(engine: ReferenceEngine) -> None:
    """Serve over stdio until the client disconnects."""
    mcp = create_server(engine)
    logger.info(f"{SERVER_NAME} running on stdio with roots: {', '.join(r.name for r in engine.roots)}")
    mcp.run()


def main() -> None:
    """Console entry point: serve with roots from settings (or the current directory)."""
    from .logging_setup import init_json_logging
    from .paths import create_engine

    init_json_logging()
    run_server(create_engine())


if __name__ == "__main__":
    main()
