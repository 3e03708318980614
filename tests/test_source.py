from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

import piio.storage.source as source_module
from piio.errors import ChunkSizeError, DigitFormatError, ValidationError
from piio.models import FileFormat, TextPolicy
from piio.protocols import ChunkSource
from piio.storage import UncachedChunkSource, unpack

from conftest import PI_DIGITS


def _digits(chunk) -> str:
    return "".join(str(d) for d in unpack(chunk).digits)


def test_implements_protocol(packed_file):
    assert isinstance(UncachedChunkSource(packed_file), ChunkSource)


def test_get_chunk_packed(packed_file):
    source = UncachedChunkSource(packed_file, FileFormat.PACKED, 64)
    chunk = source.get_chunk(10, 8)
    assert chunk.is_packed
    assert chunk.first_index == 10
    assert _digits(chunk) == PI_DIGITS[10:18]


def test_get_chunk_text(text_file):
    source = UncachedChunkSource(text_file, FileFormat.TEXT, 64)
    chunk = source.get_chunk(10, 8)
    assert not chunk.is_packed
    assert _digits(chunk) == PI_DIGITS[10:18]


def test_get_chunk_text_strict(tmp_path):
    path = tmp_path / "pi.txt"
    path.write_bytes(b"3141\n5926\n")
    assert _digits(UncachedChunkSource(path, FileFormat.TEXT, 8).get_chunk(0, 8)) == "3141592"

    strict = UncachedChunkSource(path, FileFormat.TEXT, 8, TextPolicy.STRICT)
    with pytest.raises(DigitFormatError):
        strict.get_chunk(0, 8)


def test_get_chunk_truncated_at_end(packed_file):
    source = UncachedChunkSource(packed_file, FileFormat.PACKED, 64)
    chunk = source.get_chunk(len(PI_DIGITS) - 4, 16)
    assert chunk.length == 4
    assert _digits(chunk) == PI_DIGITS[-4:]


def test_oversized_request_never_opens_file(tmp_path, monkeypatch):
    def fail_open(*args, **kwargs):
        raise AssertionError("file was opened")

    monkeypatch.setattr(source_module, "open", fail_open, raising=False)
    source = UncachedChunkSource(tmp_path / "missing.bin", FileFormat.PACKED, 16)
    with pytest.raises(ChunkSizeError) as excinfo:
        source.get_chunk(0, 18)
    assert excinfo.value.maximum == 16


def test_bad_window_rejected_before_open(tmp_path):
    source = UncachedChunkSource(tmp_path / "missing.bin", FileFormat.PACKED, 16)
    with pytest.raises(ValidationError):
        source.get_chunk(1, 4)


def test_missing_file_raises_os_error(tmp_path):
    source = UncachedChunkSource(tmp_path / "missing.bin", FileFormat.PACKED, 16)
    with pytest.raises(FileNotFoundError):
        source.get_chunk(0, 4)


def test_available_digits(packed_file, text_file):
    assert UncachedChunkSource(packed_file, FileFormat.PACKED).available_digits() == len(PI_DIGITS)
    assert UncachedChunkSource(text_file, FileFormat.TEXT).available_digits() == len(PI_DIGITS)


def test_maximum_chunk_size(packed_file):
    assert UncachedChunkSource(packed_file, FileFormat.PACKED, 1024).maximum_chunk_size() == 1024


def test_invalid_configuration(packed_file):
    with pytest.raises(ValidationError):
        UncachedChunkSource(packed_file, FileFormat.PACKED, 0)
    with pytest.raises(ValidationError, match="unknown file format"):
        UncachedChunkSource(packed_file, "hex")


def test_concurrent_reads(packed_file):
    source = UncachedChunkSource(packed_file, FileFormat.PACKED, 16)
    starts = list(range(0, len(PI_DIGITS) - 16, 2))
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda i: _digits(source.get_chunk(i, 16)), starts))
    assert results == [PI_DIGITS[i : i + 16] for i in starts]


def test_corrupt_packed_file(tmp_path):
    path = tmp_path / "corrupt.bin"
    path.write_bytes(bytes([0xFA, 0x31]))
    source = UncachedChunkSource(path, FileFormat.PACKED, 16)
    with pytest.raises(DigitFormatError):
        source.get_chunk(0, 2)
