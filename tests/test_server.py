from __future__ import annotations

import asyncio

import pytest

pytest.importorskip("mcp")

from piio.models import FileFormat
from piio.server import create_mcp_server
from piio.storage import UncachedChunkSource


def test_registers_tools(packed_file):
    mcp = create_mcp_server(UncachedChunkSource(packed_file, FileFormat.PACKED, 16))
    tools = asyncio.run(mcp.list_tools())
    assert {tool.name for tool in tools} == {"digit", "chunk", "settings", "search"}


def test_chunk_tool_schema(packed_file):
    mcp = create_mcp_server(UncachedChunkSource(packed_file, FileFormat.PACKED, 16))
    tools = {tool.name: tool for tool in asyncio.run(mcp.list_tools())}
    assert set(tools["chunk"].inputSchema["properties"]) == {"start_index", "size"}
