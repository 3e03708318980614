"""FastMCP server implementation for piio."""

from mcp.server.fastmcp import FastMCP

from piio.api import ChunkResponse, DigitResponse, PiAPI, SearchResponse, SettingsResponse
from piio.protocols import ChunkSource

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080


def create_mcp_server(
    source: ChunkSource, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> FastMCP:
    """Create an MCP server for a digit store.

    Args:
        source: Chunk source to serve digits from
        host: Address to bind for the HTTP transports
        port: Port to bind for the HTTP transports

    Returns:
        Configured FastMCP server instance
    """
    mcp = FastMCP(name="piio", host=host, port=port)
    api = PiAPI(source)

    @mcp.tool()
    def digit(index: int) -> dict:
        """Get a single digit of pi.

        Args:
            index: Zero-based position of the digit (0 is the leading 3)

        Returns:
            The index and digit, or an error message
        """
        return api.handle(DigitResponse, api.get_digit, index).to_dict()

    @mcp.tool()
    def chunk(start_index: int, size: int) -> dict:
        """Get a run of consecutive digits of pi.

        Args:
            start_index: Zero-based position of the first digit
            size: Number of digits, at most the server's maximum chunk size

        Returns:
            The first index and the list of digits, or an error message
        """
        return api.handle(ChunkResponse, api.get_chunk, start_index, size).to_dict()

    @mcp.tool()
    def settings() -> dict:
        """Get the number of available digits and the maximum chunk size."""
        return api.handle(SettingsResponse, api.settings).to_dict()

    @mcp.tool()
    def search(pattern: str) -> dict:
        """Find the first position of a series of digits in pi.

        This scans the digits from the start, so rare patterns can take a while.

        Args:
            pattern: Digits to look for, e.g. "265358"

        Returns:
            The zero-based index of the match (null when not found)
        """
        return api.handle(SearchResponse, api.search, pattern).to_dict()

    return mcp
