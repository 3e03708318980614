"""MCP server for piio."""

from piio.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
