"""Protocol for addressable digit stores."""

from typing import Protocol, runtime_checkable

from piio.models import Chunk, FileFormat


@runtime_checkable
class ChunkSource(Protocol):
    """Protocol for sources of chunks.

    Implementations must be safe to call from several threads at once.
    """

    @property
    def file_format(self) -> FileFormat:
        """Return the representation of the backing file."""
        ...

    def get_chunk(self, first_index: int, size: int) -> Chunk:
        """Return ``size`` digits starting at ``first_index``."""
        ...

    def available_digits(self) -> int:
        """Return the number of digits the source can serve."""
        ...

    def maximum_chunk_size(self) -> int:
        """Return the largest ``size`` accepted by get_chunk."""
        ...
