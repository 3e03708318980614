"""File storage for digit sequences."""

from piio.storage.chunk_io import (
    DEFAULT_CHUNK_SIZE,
    compress,
    decompress,
    digit,
    pack,
    read_next_packed,
    read_next_text,
    read_packed,
    read_text,
    unpack,
    write_chunk,
)
from piio.storage.source import UncachedChunkSource

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "UncachedChunkSource",
    "compress",
    "decompress",
    "digit",
    "pack",
    "read_next_packed",
    "read_next_text",
    "read_packed",
    "read_text",
    "unpack",
    "write_chunk",
]
