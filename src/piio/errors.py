"""Exception types raised by piio."""

# Returned alongside an out-of-range digit lookup.
INVALID_DIGIT = 255


class PiioError(Exception):
    """Base class for all piio errors."""


class ValidationError(PiioError, ValueError):
    """An index, size, format or pattern is outside the accepted contract."""


class ChunkSizeError(ValidationError):
    """Requested chunk is larger than the source allows."""

    def __init__(self, size: int, maximum: int):
        super().__init__(
            f"requested chunk of size {size} but only supporting chunks of size up to {maximum}"
        )
        self.size = size
        self.maximum = maximum


class PatternError(ValidationError):
    """Search pattern is empty or contains something other than digits."""


class DigitIndexError(PiioError, IndexError):
    """Digit index lies outside the chunk that was asked for it."""

    def __init__(self, index: int, first_index: int, last_index: int):
        super().__init__(
            f"index {index} out of range [{first_index}, {last_index}]"
        )
        self.index = index
        self.digit = INVALID_DIGIT


class DigitFormatError(PiioError, ValueError):
    """Input bytes or values are not decimal digits."""


class ShortWriteError(PiioError, OSError):
    """Sink accepted fewer bytes than were written to it."""


class ChunkInvariantError(PiioError, TypeError):
    """A chunk was handled as a representation it is not.

    This signals a bug in the caller, never bad input data.
    """
