"""Utility functions for piio."""

from piio.utils.nibbles import ascii_to_digits, digits_to_ascii, pack_digits, unpack_bytes

__all__ = ["pack_digits", "unpack_bytes", "digits_to_ascii", "ascii_to_digits"]
