from __future__ import annotations

from typing import Iterable, Protocol

from sharex_uploader.application.errors import FileTooLarge
from sharex_uploader.domain.value_objects.object_key import extract_extension

DEFAULT_CHUNK_SIZE = 64 * 1024

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


class ByteSource(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


def normalized_extension(filename: str) -> str:
    return extract_extension(filename).lower()[1:]


def is_allowed_extension(filename: str, allowed: Iterable[str]) -> bool:
    return normalized_extension(filename) in set(allowed)


def format_file_size(size_bytes: int) -> str:
    """Return a short human readable size, e.g. ``"1.5 KB"`` or ``"10 MB"``."""
    if size_bytes <= 0:
        return "0 Bytes"
    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {_SIZE_UNITS[unit]}"


def too_large_message(max_bytes: int) -> str:
    return f"File too large. Maximum size: {format_file_size(max_bytes)}"


async def read_capped(
    source: ByteSource, max_bytes: int, *, chunk_size: int = DEFAULT_CHUNK_SIZE
) -> bytes:
    """Read ``source`` fully, failing once more than ``max_bytes`` arrive.

    At most ``max_bytes + chunk_size`` bytes are ever held in memory.
    """
    buffer = bytearray()
    while chunk := await source.read(chunk_size):
        buffer.extend(chunk)
        if len(buffer) > max_bytes:
            raise FileTooLarge(too_large_message(max_bytes))
    return bytes(buffer)
