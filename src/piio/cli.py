"""CLI entry point for piio."""

import argparse
import contextlib
import logging
import sys
from pathlib import Path
from typing import BinaryIO, Iterator

from piio.errors import PiioError
from piio.models import FileFormat, TextPolicy
from piio.search import search as search_digits
from piio.storage import DEFAULT_CHUNK_SIZE, UncachedChunkSource, compress, decompress

DEFAULT_PI_FILE = "pi.bin"

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """A command failed; carries the process exit code."""

    def __init__(self, message: str, code: int):
        super().__init__(message)
        self.code = code


@contextlib.contextmanager
def _open_stream(name: str, mode: str) -> Iterator[BinaryIO]:
    """Open ``name`` for binary I/O, treating "-" as stdin/stdout."""
    if name == "-":
        stream = sys.stdin.buffer if mode == "rb" else sys.stdout.buffer
        yield stream
        if mode == "wb":
            stream.flush()
        return
    try:
        f = open(name, mode)
    except OSError as e:
        raise CommandError(str(e), 2) from e
    with f:
        yield f


def _require_file(path: str) -> Path:
    pi_path = Path(path)
    if not pi_path.is_file():
        raise CommandError(f"Digit file not found: {path}", 1)
    return pi_path


def compress_file(infile: str, outfile: str, policy: TextPolicy, chunk_size: int) -> None:
    """Compress a text file of digits into the packed format.

    Args:
        infile: Text file to read, or "-" for stdin
        outfile: Packed file to write, or "-" for stdout
        policy: Handling of non-digit bytes in the input
        chunk_size: Digits converted per step
    """
    logger.info(f"Compressing {infile} -> {outfile}")
    with _open_stream(infile, "rb") as src, _open_stream(outfile, "wb") as dst:
        count = compress(src, dst, policy=policy, chunk_size=chunk_size)
    logger.info(f"Compressed {count} digits")


def decompress_file(infile: str, outfile: str, chunk_size: int) -> None:
    """Expand a packed file of digits into the text format."""
    logger.info(f"Decompressing {infile} -> {outfile}")
    with _open_stream(infile, "rb") as src, _open_stream(outfile, "wb") as dst:
        count = decompress(src, dst, chunk_size=chunk_size)
    logger.info(f"Decompressed {count} digits")


def search(pi: str, pattern: str, file_format: FileFormat = FileFormat.PACKED) -> None:
    """Search the packed digit file for a series of digits.

    Args:
        pi: Path to the packed digit file
        pattern: Digits to look for
        file_format: Format of the digit file; only packed files can be searched
    """
    if file_format is not FileFormat.PACKED:
        raise CommandError("search needs a packed file; use compress first", 1)
    source = UncachedChunkSource(_require_file(pi), file_format, DEFAULT_CHUNK_SIZE)
    index = search_digits(source, pattern)
    if index is not None:
        print(f'Found "{pattern}" at position {index}.')
    else:
        print(f'Could not find "{pattern}".')


def info(pi: str, file_format: FileFormat, max_chunk_size: int) -> None:
    """Show information about a digit file."""
    pi_path = _require_file(pi)
    source = UncachedChunkSource(pi_path, file_format, max_chunk_size)

    print(f"Digit file: {pi_path.name}")
    print(f"  Size: {pi_path.stat().st_size / 1024:.1f} KB")
    print(f"  Format: {source.file_format.value}")
    print(f"  Available digits: {source.available_digits()}")
    print(f"  Maximum chunk size: {source.maximum_chunk_size()}")


def serve(
    pi: str,
    file_format: FileFormat,
    policy: TextPolicy,
    max_chunk_size: int,
    transport: str = "stdio",
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Start the MCP server for a digit file.

    Args:
        pi: Path to the digit file
        file_format: Representation of the digit file
        policy: Handling of non-digit bytes in text files
        max_chunk_size: Largest chunk a client may request
        transport: Transport protocol (stdio, sse or streamable-http)
        host: Address to bind for the HTTP transports
        port: Port to bind for the HTTP transports
    """
    source = UncachedChunkSource(_require_file(pi), file_format, max_chunk_size, policy)

    # Import here to avoid loading MCP unless needed
    from piio.server import create_mcp_server
    from piio.server.mcp_server import DEFAULT_HOST, DEFAULT_PORT

    from typing import cast, Literal

    logger.info(f"Serving {pi} via {transport}")
    mcp = create_mcp_server(source, host or DEFAULT_HOST, port or DEFAULT_PORT)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="piio",
        description="piio - random access to the digits of pi",
    )
    parser.add_argument(
        "-p",
        "--pi",
        default=DEFAULT_PI_FILE,
        help=f"The file of pi (default: {DEFAULT_PI_FILE})",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in FileFormat],
        default=FileFormat.PACKED.value,
        help="Format of the file of pi (default: packed)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on non-digit bytes in text input instead of skipping them",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # compress command
    compress_parser = subparsers.add_parser(
        "compress",
        help="Compress a text file of digits of pi",
    )
    compress_parser.add_argument("infile", help="Text file to read, - for stdin")
    compress_parser.add_argument("outfile", help="Packed file to write, - for stdout")
    compress_parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Digits converted per step (default: {DEFAULT_CHUNK_SIZE})",
    )

    # decompress command
    decompress_parser = subparsers.add_parser(
        "decompress",
        help="Expand a packed file of digits of pi into text",
    )
    decompress_parser.add_argument("infile", help="Packed file to read, - for stdin")
    decompress_parser.add_argument("outfile", help="Text file to write, - for stdout")
    decompress_parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Digits converted per step (default: {DEFAULT_CHUNK_SIZE})",
    )

    # search command
    search_parser = subparsers.add_parser(
        "search",
        help="Search for a string of digits in pi",
    )
    search_parser.add_argument("pattern", help="Digits to search for")

    # info command
    info_parser = subparsers.add_parser(
        "info",
        help="Show information about the file of pi",
    )
    info_parser.add_argument(
        "-c",
        "--max-chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"The maximum size of a chunk to be served (default: {DEFAULT_CHUNK_SIZE})",
    )

    # serve command
    serve_parser = subparsers.add_parser(
        "serve",
        help="Listen and serve",
    )
    serve_parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )
    serve_parser.add_argument("--host", help="The address to listen on")
    serve_parser.add_argument("--port", type=int, help="The port to listen on")
    serve_parser.add_argument(
        "-c",
        "--max-chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"The maximum size of a chunk to be served (default: {DEFAULT_CHUNK_SIZE})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    file_format = FileFormat(args.format)
    policy = TextPolicy.STRICT if args.strict else TextPolicy.LENIENT

    try:
        if args.command == "compress":
            compress_file(args.infile, args.outfile, policy, args.chunk_size)
        elif args.command == "decompress":
            decompress_file(args.infile, args.outfile, args.chunk_size)
        elif args.command == "search":
            search(args.pi, args.pattern, file_format)
        elif args.command == "info":
            info(args.pi, file_format, args.max_chunk_size)
        elif args.command == "serve":
            serve(
                args.pi,
                file_format,
                policy,
                args.max_chunk_size,
                args.transport,
                args.host,
                args.port,
            )
    except CommandError as e:
        logger.error(str(e))
        return e.code
    except (PiioError, OSError) as e:
        logger.error(str(e))
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
