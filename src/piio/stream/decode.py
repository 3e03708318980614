"""Sequential ASCII view over a packed chunk source."""

import io
import logging

from piio.errors import ValidationError
from piio.models import FileFormat
from piio.protocols import ChunkSource
from piio.storage.chunk_io import unpack
from piio.utils.nibbles import digits_to_ascii

logger = logging.getLogger(__name__)


class DecodeStream(io.RawIOBase):
    """Read a packed digit store as a stream of the characters '0'-'9'.

    Each read pulls the next chunk from the source, starting at
    ``current_index``, and decodes it. A read of 0 bytes means the digits
    are exhausted. Wrap in ``io.BufferedReader`` for buffered access.

    A stream has a single owner; it is not meant to be shared across threads.
    """

    def __init__(self, source: ChunkSource):
        super().__init__()
        if source.file_format is not FileFormat.PACKED:
            raise ValidationError("DecodeStream needs a packed chunk source")
        limit = source.maximum_chunk_size()
        self._max_request = limit - limit % 2
        if self._max_request < 2:
            raise ValidationError(f"chunk size limit {limit} is too small to stream")
        self._source = source
        self._pending = b""
        self.current_index = 0

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
        size = len(buffer)
        if size == 0:
            return 0

        if not self._pending:
            request = min(max(2, size + size % 2), self._max_request)
            chunk = self._source.get_chunk(self.current_index, request)
            if chunk.length == 0:
                logger.debug(f"Stream exhausted at digit {self.current_index}")
                return 0
            self._pending = digits_to_ascii(unpack(chunk).digits)
            self.current_index += chunk.length

        n = min(size, len(self._pending))
        buffer[:n] = self._pending[:n]
        self._pending = self._pending[n:]
        return n
