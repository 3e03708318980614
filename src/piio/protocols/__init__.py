"""Protocol definitions for extensible components."""

from piio.protocols.source import ChunkSource

__all__ = ["ChunkSource"]
