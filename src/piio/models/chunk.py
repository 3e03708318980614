"""Chunk representations for runs of digits of pi."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np

from piio.errors import DigitFormatError, DigitIndexError, ValidationError


class FileFormat(str, Enum):
    """On-disk representations of the digit sequence."""

    PACKED = "packed"  # two digits per byte, lower index in the high nibble
    TEXT = "text"  # one ASCII digit per byte


class TextPolicy(str, Enum):
    """How non-digit bytes in a text file are treated."""

    LENIENT = "lenient"  # drop them, the chunk shrinks
    STRICT = "strict"  # raise DigitFormatError


class _ChunkBase(ABC):
    """Index arithmetic shared by both chunk variants."""

    first_index: int

    @property
    @abstractmethod
    def length(self) -> int:
        """Number of digits contained in this chunk."""

    @property
    def last_index(self) -> int:
        """Index of the last digit contained in this chunk."""
        return self.first_index + self.length - 1

    def _offset(self, index: int) -> int:
        if index < self.first_index or index > self.last_index:
            raise DigitIndexError(index, self.first_index, self.last_index)
        return index - self.first_index

    def __len__(self) -> int:
        return self.length


@dataclass(frozen=True)
class PackedChunk(_ChunkBase):
    """Digits packed two per byte.

    Digit ``i`` (relative to ``first_index``) lives in byte ``i // 2``, in the
    high nibble when ``i`` is even and the low nibble otherwise.
    """

    first_index: int
    data: bytes

    is_packed = True

    def __post_init__(self):
        if self.first_index < 0:
            raise ValidationError("first index must not be negative")
        data = bytes(self.data)
        values = np.frombuffer(data, dtype=np.uint8)
        if ((values >> 4) > 9).any() or ((values & 0x0F) > 9).any():
            raise DigitFormatError("packed nibbles must hold digits between 0 and 9")
        object.__setattr__(self, "data", data)

    @property
    def length(self) -> int:
        return len(self.data) * 2

    def digit(self, index: int) -> int:
        """Return the digit at global ``index``."""
        offset = self._offset(index)
        byte = self.data[offset // 2]
        if offset % 2 == 0:
            byte >>= 4
        return byte & 0x0F


@dataclass(frozen=True)
class UnpackedChunk(_ChunkBase):
    """One digit value (0-9) per byte."""

    first_index: int
    digits: bytes

    is_packed = False

    def __post_init__(self):
        if self.first_index < 0:
            raise ValidationError("first index must not be negative")
        digits = bytes(self.digits)
        if digits and max(digits) > 9:
            raise DigitFormatError("digit values must be between 0 and 9")
        object.__setattr__(self, "digits", digits)

    @property
    def length(self) -> int:
        return len(self.digits)

    def digit(self, index: int) -> int:
        """Return the digit at global ``index``."""
        return self.digits[self._offset(index)]


Chunk = Union[PackedChunk, UnpackedChunk]
