"""File-backed chunk source."""

import logging
from pathlib import Path

from piio.errors import ChunkSizeError, ValidationError
from piio.models import Chunk, FileFormat, TextPolicy
from piio.storage.chunk_io import (
    DEFAULT_CHUNK_SIZE,
    parse_file_format,
    read_packed,
    read_text,
    validate_window,
)

logger = logging.getLogger(__name__)


class UncachedChunkSource:
    """Serve chunks straight from a digit file.

    Holds configuration only. Every call opens its own file handle, so one
    instance can be shared by concurrent request handlers without locking.
    """

    def __init__(
        self,
        path: Path | str,
        file_format: FileFormat = FileFormat.PACKED,
        max_chunk_size: int = DEFAULT_CHUNK_SIZE,
        text_policy: TextPolicy = TextPolicy.LENIENT,
    ):
        """Initialize the source.

        Args:
            path: Digit file to read from
            file_format: Representation of the file
            max_chunk_size: Largest chunk get_chunk will serve
            text_policy: Handling of non-digit bytes in text files
        """
        if max_chunk_size <= 0:
            raise ValidationError("maximum chunk size must be positive")
        self.path = Path(path)
        self._file_format = parse_file_format(file_format)
        self._max_chunk_size = max_chunk_size
        self.text_policy = TextPolicy(text_policy)

    @property
    def file_format(self) -> FileFormat:
        return self._file_format

    def get_chunk(self, first_index: int, size: int) -> Chunk:
        """Read ``size`` digits starting at ``first_index``."""
        if size > self._max_chunk_size:
            raise ChunkSizeError(size, self._max_chunk_size)
        validate_window(first_index, size)

        logger.debug(f"Chunk request {first_index}+{size} from {self.path}")
        with open(self.path, "rb") as f:
            if self._file_format is FileFormat.PACKED:
                return read_packed(f, first_index, size)
            return read_text(f, first_index, size, policy=self.text_policy)

    def available_digits(self) -> int:
        """Number of digits in the file, derived from its byte size."""
        size = self.path.stat().st_size
        if self._file_format is FileFormat.PACKED:
            return size * 2
        return size

    def maximum_chunk_size(self) -> int:
        return self._max_chunk_size
