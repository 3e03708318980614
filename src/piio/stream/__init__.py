"""Streaming access to digit stores."""

from piio.stream.decode import DecodeStream

__all__ = ["DecodeStream"]
