"""Nibble packing and ASCII digit conversion."""

import numpy as np

from piio.errors import ChunkInvariantError, DigitFormatError
from piio.models.chunk import TextPolicy

ASCII_ZERO = ord("0")


def _as_array(data: bytes) -> np.ndarray:
    return np.frombuffer(data, dtype=np.uint8)


def pack_digits(digits: bytes) -> bytes:
    """Pack digit values two per byte, lower index in the high nibble.

    Args:
        digits: Digit values (0-9), one per byte. Length must be even.

    Returns:
        ``len(digits) // 2`` packed bytes
    """
    if len(digits) % 2 != 0:
        raise ChunkInvariantError(
            f"cannot pack an odd number of digits ({len(digits)})"
        )
    values = _as_array(digits)
    return ((values[0::2] << 4) | values[1::2]).astype(np.uint8).tobytes()


def unpack_bytes(data: bytes) -> bytes:
    """Split packed bytes into one digit value per byte."""
    values = _as_array(data)
    out = np.empty(len(values) * 2, dtype=np.uint8)
    out[0::2] = values >> 4
    out[1::2] = values & 0x0F
    return out.tobytes()


def digits_to_ascii(digits: bytes) -> bytes:
    """Turn digit values into the characters '0'-'9'."""
    return (_as_array(digits) + ASCII_ZERO).astype(np.uint8).tobytes()


def ascii_to_digits(raw: bytes, policy: TextPolicy) -> bytes:
    """Turn ASCII digit characters into digit values.

    Args:
        raw: Bytes read from a text file
        policy: LENIENT drops non-digit bytes, STRICT rejects them

    Returns:
        Digit values, one per byte. Shorter than ``raw`` when bytes were dropped.
    """
    values = _as_array(raw)
    is_digit = (values >= ASCII_ZERO) & (values <= ASCII_ZERO + 9)
    if not is_digit.all():
        if TextPolicy(policy) is TextPolicy.STRICT:
            offset = int(np.argmin(is_digit))
            raise DigitFormatError(
                f"non-digit byte {raw[offset:offset + 1]!r} at offset {offset}"
            )
        values = values[is_digit]
    return (values - ASCII_ZERO).astype(np.uint8).tobytes()
