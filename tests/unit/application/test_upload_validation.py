from __future__ import annotations

import io

import pytest

from sharex_uploader.application.errors import FileTooLarge
from sharex_uploader.application.uploads.validation import (
    format_file_size,
    is_allowed_extension,
    read_capped,
)


class ChunkedSource:
    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)
        self.bytes_read = 0

    async def read(self, size: int = -1) -> bytes:
        chunk = self._buffer.read(size)
        self.bytes_read += len(chunk)
        return chunk


def test_allowed_extension_matches_case_insensitively():
    assert is_allowed_extension("a.png", ["png", "jpg"])
    assert is_allowed_extension("A.JPG", ["png", "jpg"])
    assert not is_allowed_extension("a.EXE", ["png", "jpg"])


def test_extensionless_files_are_rejected():
    assert not is_allowed_extension("noext", ["png"])
    assert not is_allowed_extension(".png", ["png"])
    assert not is_allowed_extension("", ["png"])


def test_double_dot_filename_uses_trailing_extension():
    assert is_allowed_extension("..png", ["png"])
    assert not is_allowed_extension("..", ["png"])


def test_only_last_extension_counts():
    assert not is_allowed_extension("image.png.exe", ["png"])
    assert is_allowed_extension("payload.exe.png", ["png"])


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1536, "1.5 KB"),
        (10 * 1024 * 1024, "10 MB"),
        (3 * 1024**3, "3 GB"),
    ],
)
def test_format_file_size(size, expected):
    assert format_file_size(size) == expected


@pytest.mark.asyncio
async def test_read_capped_returns_payload_within_limit():
    data = b"x" * 1000
    assert await read_capped(ChunkedSource(data), 1000, chunk_size=64) == data


@pytest.mark.asyncio
async def test_read_capped_stops_early_on_oversized_payload():
    source = ChunkedSource(b"x" * 10_000)
    with pytest.raises(FileTooLarge) as excinfo:
        await read_capped(source, 1000, chunk_size=100)
    assert source.bytes_read <= 1100
    assert "File too large" in excinfo.value.message
