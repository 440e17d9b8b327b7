"""Tests for the MCP tool server."""

import json
from urllib.parse import quote

import pytest

from incontext.lib.references import ReferenceNotFoundError
from incontext.mcp_server import SERVER_NAME
from incontext.mcp_server import TOOL_NAME
from incontext.mcp_server import create_server
from incontext.mcp_server import resolve_to_wire


def test_resolve_to_wire_text(engine):
    wire = resolve_to_wire(engine, "@proj/src/a.ts:L2:3")
    assert wire["type"] == "text"
    assert wire["reference"] == "@proj/src/a.ts:L2:3"
    assert wire["lineCount"] == 5
    assert wire["excerpt"] == "line2\nline3"
    json.dumps(wire)


def test_resolve_to_wire_image(engine):
    wire = resolve_to_wire(engine, "@proj/media/new.png")
    assert wire["type"] == "image"
    assert wire["mimeType"] == "image/png"
    assert wire["base64"]


def test_resolve_to_wire_directory(engine):
    wire = resolve_to_wire(engine, "proj/dir/")
    assert wire["type"] == "directory"
    assert [c["name"] for c in wire["contents"]] == ["sub", "A.txt", "b.md"]


@pytest.mark.parametrize("reference", ["", "   "])
def test_empty_reference_rejected(engine, reference):
    with pytest.raises(ValueError, match="required"):
        resolve_to_wire(engine, reference)


def test_errors_propagate(engine):
    with pytest.raises(ReferenceNotFoundError):
        resolve_to_wire(engine, "@proj/missing.ts")


def test_server_name(engine):
    assert create_server(engine).name == SERVER_NAME


@pytest.mark.asyncio
async def test_tool_registered(engine):
    mcp = create_server(engine)
    tools = await mcp.list_tools()
    assert [tool.name for tool in tools] == [TOOL_NAME]
    assert "reference" in tools[0].inputSchema["properties"]


@pytest.mark.asyncio
async def test_resource_template_registered(engine):
    mcp = create_server(engine)
    templates = await mcp.list_resource_templates()
    assert [t.uriTemplate for t in templates] == ["incontext://{reference}"]


@pytest.mark.asyncio
async def test_resource_decodes_reference(engine):
    mcp = create_server(engine)
    uri = f"incontext://{quote('@proj/src/lib/util.ts', safe='')}"
    contents = list(await mcp.read_resource(uri))
    payload = json.loads(contents[0].content)
    assert payload["reference"] == "@proj/src/lib/util.ts"
    assert payload["content"] == "export const x = 1;\n"
