"""Request handling shared by the servers.

Wraps a ChunkSource with the operations clients ask for and shapes the
results into plain response objects. Recoverable failures come back as a
response with ``error`` set instead of an exception.
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Callable, Optional, TypeVar

from piio.errors import PiioError, ValidationError
from piio.protocols import ChunkSource
from piio.search import search
from piio.storage.chunk_io import unpack

logger = logging.getLogger(__name__)


@dataclass
class Response:
    error: Optional[str] = field(default=None, kw_only=True)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DigitResponse(Response):
    index: int = 0
    digit: Optional[int] = None


@dataclass
class ChunkResponse(Response):
    first_index: int = 0
    digits: list[int] = field(default_factory=list)


@dataclass
class SettingsResponse(Response):
    available_digits: int = 0
    maximum_chunk_size: int = 0
    file_format: str = ""


@dataclass
class SearchResponse(Response):
    pattern: str = ""
    index: Optional[int] = None
    found: bool = False


R = TypeVar("R", bound=Response)


class PiAPI:
    """Digit, chunk, settings and search operations over one source."""

    def __init__(self, source: ChunkSource):
        self.source = source

    def get_digit(self, index: int) -> DigitResponse:
        """Look up a single digit by its index."""
        if index < 0:
            raise ValidationError(f"the index must not be negative, got {index}")
        chunk = self.source.get_chunk(index - index % 2, 2)
        return DigitResponse(index=index, digit=chunk.digit(index))

    def get_chunk(self, start_index: int, size: int) -> ChunkResponse:
        """Return ``size`` digits from ``start_index`` on.

        Unlike ChunkSource.get_chunk, any start and size are accepted: the
        read is widened to an even window and the result trimmed back.
        """
        if start_index < 0:
            raise ValidationError(f"the start index must not be negative, got {start_index}")
        if size <= 0:
            raise ValidationError(f"the size must be positive, got {size}")

        first_index = start_index - start_index % 2
        offset = start_index - first_index
        span = offset + size
        chunk = unpack(self.source.get_chunk(first_index, span + span % 2))
        digits = list(chunk.digits[offset : offset + size])
        return ChunkResponse(first_index=start_index, digits=digits)

    def settings(self) -> SettingsResponse:
        return SettingsResponse(
            available_digits=self.source.available_digits(),
            maximum_chunk_size=self.source.maximum_chunk_size(),
            file_format=self.source.file_format.value,
        )

    def search(self, pattern: str) -> SearchResponse:
        """Find the first occurrence of a digit string."""
        index = search(self.source, pattern)
        return SearchResponse(pattern=pattern, index=index, found=index is not None)

    @staticmethod
    def handle(response_type: type[R], operation: Callable[..., R], *args) -> R:
        """Run ``operation`` and turn piio and I/O failures into a response."""
        try:
            return operation(*args)
        except (PiioError, OSError) as e:
            logger.debug(f"{operation.__name__}{args} failed: {e}")
            return response_type(error=str(e))
