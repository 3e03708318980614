"""piio - random access to the digits of pi."""

from piio.api import PiAPI
from piio.errors import (
    INVALID_DIGIT,
    ChunkInvariantError,
    ChunkSizeError,
    DigitFormatError,
    DigitIndexError,
    PatternError,
    PiioError,
    ShortWriteError,
    ValidationError,
)
from piio.models import Chunk, FileFormat, PackedChunk, TextPolicy, UnpackedChunk
from piio.protocols import ChunkSource
from piio.search import search
from piio.storage import (
    UncachedChunkSource,
    digit,
    pack,
    read_packed,
    read_text,
    unpack,
    write_chunk,
)
from piio.stream import DecodeStream

__version__ = "0.1.0"

__all__ = [
    "INVALID_DIGIT",
    "Chunk",
    "ChunkInvariantError",
    "ChunkSizeError",
    "ChunkSource",
    "DecodeStream",
    "DigitFormatError",
    "DigitIndexError",
    "FileFormat",
    "PackedChunk",
    "PatternError",
    "PiAPI",
    "PiioError",
    "ShortWriteError",
    "TextPolicy",
    "UncachedChunkSource",
    "UnpackedChunk",
    "ValidationError",
    "digit",
    "pack",
    "read_packed",
    "read_text",
    "search",
    "unpack",
    "write_chunk",
]
