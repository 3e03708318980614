from __future__ import annotations

import pytest

from piio.errors import PatternError
from piio.models import FileFormat
from piio.search import SEARCH_WINDOW, prefix_function, search
from piio.storage import UncachedChunkSource

from conftest import PACKED_PI, PI_DIGITS, packed_bytes


class CountingSource(UncachedChunkSource):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.requests = []

    def get_chunk(self, first_index, size):
        self.requests.append((first_index, size))
        return super().get_chunk(first_index, size)


@pytest.fixture
def short_pi(tmp_path):
    path = tmp_path / "short.bin"
    path.write_bytes(PACKED_PI)
    return UncachedChunkSource(path, FileFormat.PACKED, 512)


def _source_for(tmp_path, digits: str) -> UncachedChunkSource:
    path = tmp_path / "digits.bin"
    path.write_bytes(packed_bytes(digits))
    return UncachedChunkSource(path, FileFormat.PACKED, 512)


def test_finds_pattern(short_pi):
    assert search(short_pi, "265") == 6
    assert search(short_pi, [2, 6, 5]) == 6
    assert search(short_pi, b"265") == 6


def test_match_at_start_and_end(short_pi):
    assert search(short_pi, "3") == 0
    assert search(short_pi, "314159265359") == 0
    assert search(short_pi, "359") == 9


def test_absent_pattern_is_not_an_error(short_pi):
    assert search(short_pi, "999") is None
    assert search(short_pi, [9, 9, 9]) is None


def test_pattern_longer_than_data(short_pi):
    assert search(short_pi, "3141592653590") is None


@pytest.mark.parametrize("pattern", ["", "12a", "3.14", "٣", [1, 10], [1, -1], [True]])
def test_invalid_patterns_fail_before_reading(tmp_path, pattern):
    source = CountingSource(tmp_path / "missing.bin", FileFormat.PACKED, 512)
    with pytest.raises(PatternError):
        search(source, pattern)
    assert source.requests == []


def test_reads_in_windows(packed_file):
    source = CountingSource(packed_file, FileFormat.PACKED, 512)
    assert search(source, PI_DIGITS[-6:]) == PI_DIGITS.find(PI_DIGITS[-6:])
    assert source.requests[0] == (0, SEARCH_WINDOW)
    assert source.requests[1] == (SEARCH_WINDOW, SEARCH_WINDOW)


def test_match_spanning_window_boundary(tmp_path):
    digits = "1" * (SEARCH_WINDOW - 3) + "123456" + "0" * 59
    source = _source_for(tmp_path, digits)
    assert search(source, "123456") == SEARCH_WINDOW - 3


def test_partial_match_restart(tmp_path):
    # A plain reset-on-mismatch counter misses this: the second "1" must
    # restart the match instead of being discarded.
    source = _source_for(tmp_path, "1112000000")
    assert search(source, "112") == 1


def test_overlapping_prefix_across_windows(tmp_path):
    digits = "0" * (SEARCH_WINDOW - 4) + "12121213" + "0" * 56
    source = _source_for(tmp_path, digits)
    assert search(source, "121213") == SEARCH_WINDOW - 2


def test_searches_through_limited_chunks(tmp_path):
    path = tmp_path / "digits.bin"
    path.write_bytes(packed_bytes(PI_DIGITS))
    source = UncachedChunkSource(path, FileFormat.PACKED, 8)
    assert search(source, PI_DIGITS[60:70]) == PI_DIGITS.find(PI_DIGITS[60:70])


def test_prefix_function():
    assert prefix_function(b"") == []
    assert prefix_function(b"1111") == [0, 1, 2, 3]
    assert prefix_function(b"121213") == [0, 0, 1, 2, 3, 0]
    assert prefix_function(b"112") == [0, 1, 0]
