from __future__ import annotations

from pathlib import Path

import pytest

PI_DIGITS = (
    "3141592653589793238462643383279502884197169399375105820974944592"
    "3078164062862089986280348253421170679821480865132823066470938446"
)

UNPACKED_PI = bytes([3, 1, 4, 1, 5, 9, 2, 6, 5, 3, 5, 9])
PACKED_PI = bytes([0x31, 0x41, 0x59, 0x26, 0x53, 0x59])


def packed_bytes(digits: str) -> bytes:
    return bytes(int(digits[i]) << 4 | int(digits[i + 1]) for i in range(0, len(digits), 2))


@pytest.fixture
def packed_file(tmp_path: Path) -> Path:
    path = tmp_path / "pi.bin"
    path.write_bytes(packed_bytes(PI_DIGITS))
    return path


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    path = tmp_path / "pi.txt"
    path.write_bytes(PI_DIGITS.encode("ascii"))
    return path
