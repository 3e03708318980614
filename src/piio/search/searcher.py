"""Substring search over the digits of a packed store."""

import logging
from typing import Sequence

from piio.errors import PatternError
from piio.protocols import ChunkSource
from piio.stream import DecodeStream

logger = logging.getLogger(__name__)

SEARCH_WINDOW = 64

_DIGIT_CHARS = frozenset(b"0123456789")


def _normalize_pattern(pattern: str | bytes | Sequence[int]) -> bytes:
    """Return ``pattern`` as ASCII digit characters."""
    if isinstance(pattern, str):
        if not pattern.isascii():
            raise PatternError("you can only search for series of digits")
        pattern = pattern.encode("ascii")
    elif isinstance(pattern, (bytes, bytearray)):
        pattern = bytes(pattern)
    else:
        values = list(pattern)
        if not all(isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 9 for v in values):
            raise PatternError("you can only search for series of digits")
        pattern = bytes(v + ord("0") for v in values)

    if not pattern:
        raise PatternError("search pattern must not be empty")
    if not all(c in _DIGIT_CHARS for c in pattern):
        raise PatternError("you can only search for series of digits")
    return pattern


def prefix_function(pattern: bytes) -> list[int]:
    """Compute the Knuth-Morris-Pratt failure table.

    ``table[i]`` is the length of the longest proper prefix of
    ``pattern[:i + 1]`` that is also a suffix of it.
    """
    table = [0] * len(pattern)
    k = 0
    for i in range(1, len(pattern)):
        while k and pattern[i] != pattern[k]:
            k = table[k - 1]
        if pattern[i] == pattern[k]:
            k += 1
        table[i] = k
    return table


def search(source: ChunkSource, pattern: str | bytes | Sequence[int]) -> int | None:
    """Find the first occurrence of ``pattern`` in the digits of ``source``.

    Args:
        source: Packed chunk source to scan
        pattern: Digits to look for, as a string ("265") or digit values ([2, 6, 5])

    Returns:
        Zero-based index of the first digit of the match, or None if the
        digits run out without a match
    """
    needle = _normalize_pattern(pattern)
    table = prefix_function(needle)
    logger.debug(f"Searching for {needle.decode()} in windows of {SEARCH_WINDOW}")

    # The automaton state carries over between windows, so no digit is re-read.
    matched = 0
    consumed = 0
    window = bytearray(SEARCH_WINDOW)
    with DecodeStream(source) as stream:
        while True:
            n = stream.readinto(window)
            if n == 0:
                logger.debug(f"No match after {consumed} digits")
                return None
            for c in window[:n]:
                while matched and c != needle[matched]:
                    matched = table[matched - 1]
                if c == needle[matched]:
                    matched += 1
                consumed += 1
                if matched == len(needle):
                    index = consumed - len(needle)
                    logger.debug(f"Match at {index}")
                    return index
