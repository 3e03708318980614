"""Reading, writing and converting chunks of digits.

Packed files hold two digits per byte with the lower index digit in the high
nibble, so ``file size * 2`` is the digit count. Text files hold one ASCII
character per digit, no delimiters and no decimal point (``314159...``).
"""

import logging
from typing import BinaryIO

from piio.errors import ChunkInvariantError, ShortWriteError, ValidationError
from piio.models.chunk import Chunk, FileFormat, PackedChunk, TextPolicy, UnpackedChunk
from piio.utils.nibbles import ascii_to_digits, digits_to_ascii, pack_digits, unpack_bytes

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 512


def _check_size(size: int) -> None:
    if size <= 0 or size % 2 != 0:
        raise ValidationError("only positive even sizes are supported")


def validate_window(first_index: int, size: int) -> None:
    """Reject windows that are not aligned to whole packed bytes."""
    if first_index < 0 or first_index % 2 != 0:
        raise ValidationError("only positive even first indexes are supported")
    _check_size(size)


def read_packed(stream: BinaryIO, first_index: int, size: int) -> PackedChunk:
    """Read ``size`` digits starting at ``first_index`` from a packed file.

    Args:
        stream: Seekable binary stream
        first_index: Index of the first digit, non-negative and even
        size: Number of digits, positive and even

    Returns:
        The chunk, shorter than ``size`` if the stream ends early
    """
    validate_window(first_index, size)
    stream.seek(first_index // 2)
    return read_next_packed(stream, size, first_index)


def read_next_packed(stream: BinaryIO, size: int, first_index: int = 0) -> PackedChunk:
    """Read the next ``size`` digits from the current stream position."""
    _check_size(size)
    data = stream.read(size // 2)
    logger.debug(f"Read {len(data)} packed bytes at digit {first_index}")
    return PackedChunk(first_index=first_index, data=data)


def read_text(
    stream: BinaryIO, first_index: int, size: int, *, policy: TextPolicy
) -> UnpackedChunk:
    """Read ``size`` digits starting at ``first_index`` from a text file.

    Args:
        stream: Seekable binary stream of ASCII digits
        first_index: Index of the first digit, non-negative and even
        size: Number of digits, positive and even
        policy: What to do with bytes that are not digits

    Returns:
        The chunk, shorter than ``size`` if the stream ends early or
        non-digit bytes were dropped
    """
    validate_window(first_index, size)
    stream.seek(first_index)
    return read_next_text(stream, size, first_index, policy=policy)


def read_next_text(
    stream: BinaryIO, size: int, first_index: int = 0, *, policy: TextPolicy
) -> UnpackedChunk:
    """Read the next ``size`` text digits from the current stream position."""
    _check_size(size)
    raw = stream.read(size)
    logger.debug(f"Read {len(raw)} text bytes at digit {first_index}")
    return UnpackedChunk(first_index=first_index, digits=ascii_to_digits(raw, policy))


def pack(chunk: Chunk) -> PackedChunk:
    """Return ``chunk`` in packed form. Packed chunks are returned as is."""
    if isinstance(chunk, PackedChunk):
        return chunk
    if isinstance(chunk, UnpackedChunk):
        return PackedChunk(first_index=chunk.first_index, data=pack_digits(chunk.digits))
    raise ChunkInvariantError(f"cannot pack {type(chunk).__name__}")


def unpack(chunk: Chunk) -> UnpackedChunk:
    """Return ``chunk`` in unpacked form. Unpacked chunks are returned as is."""
    if isinstance(chunk, UnpackedChunk):
        return chunk
    if isinstance(chunk, PackedChunk):
        return UnpackedChunk(first_index=chunk.first_index, digits=unpack_bytes(chunk.data))
    raise ChunkInvariantError(f"cannot unpack {type(chunk).__name__}")


def digit(chunk: Chunk, index: int) -> int:
    """Return the digit at global ``index`` of ``chunk``.

    Raises DigitIndexError when ``index`` is outside the chunk.
    """
    return chunk.digit(index)


def parse_file_format(value) -> FileFormat:
    """Return ``value`` as a FileFormat, raising ValidationError if unknown."""
    try:
        return FileFormat(value)
    except ValueError:
        raise ValidationError(f"unknown file format: {value!r}") from None


def _write_all(sink: BinaryIO, data: bytes) -> None:
    written = sink.write(data)
    if written != len(data):
        raise ShortWriteError(
            f"not all bytes could be written ({written} of {len(data)})"
        )


def write_chunk(chunk: Chunk, file_format: FileFormat, sink: BinaryIO) -> None:
    """Serialize ``chunk`` to ``sink`` in the given file format.

    Packed output needs an even digit count. Lenient text reads can yield odd
    chunks; those raise ValidationError here.
    """
    file_format = parse_file_format(file_format)
    if file_format is FileFormat.PACKED:
        if chunk.length % 2 != 0:
            raise ValidationError(
                f"cannot write {chunk.length} digits in packed format, the count must be even"
            )
        _write_all(sink, pack(chunk).data)
    else:
        _write_all(sink, digits_to_ascii(unpack(chunk).digits))


def compress(
    source: BinaryIO,
    sink: BinaryIO,
    *,
    policy: TextPolicy,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Convert a text digit stream into the packed format.

    The source is read front to back without seeking, so pipes work.

    Returns:
        Number of digits written
    """
    _check_size(chunk_size)
    written = 0
    pending = b""
    while True:
        raw = source.read(chunk_size)
        if not raw:
            break
        digits = pending + ascii_to_digits(raw, policy)
        usable = len(digits) - len(digits) % 2
        pending = digits[usable:]
        if usable:
            write_chunk(UnpackedChunk(written, digits[:usable]), FileFormat.PACKED, sink)
            written += usable

    if pending:
        logger.warning(
            f"Dropped trailing digit {pending[0]} at index {written}: "
            "packed files hold an even number of digits"
        )
    return written


def decompress(
    source: BinaryIO, sink: BinaryIO, *, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> int:
    """Convert a packed digit stream into the text format.

    Returns:
        Number of digits written
    """
    written = 0
    while True:
        chunk = read_next_packed(source, chunk_size, written)
        if chunk.length == 0:
            break
        write_chunk(chunk, FileFormat.TEXT, sink)
        written += chunk.length
    return written
