"""Data models for piio."""

from piio.models.chunk import Chunk, FileFormat, PackedChunk, TextPolicy, UnpackedChunk

__all__ = ["Chunk", "PackedChunk", "UnpackedChunk", "FileFormat", "TextPolicy"]
