"""Helpers for draining binary streams."""

from __future__ import annotations

import io
from typing import BinaryIO

DEFAULT_BUFFER_SIZE = 8192


def transfer_to(source: BinaryIO, sink: BinaryIO, buffer_size: int = DEFAULT_BUFFER_SIZE) -> int:
    """Copy ``source`` into ``sink`` chunk by chunk and return the byte count."""
    transferred = 0
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            break
        sink.write(chunk)
        transferred += len(chunk)
    return transferred


def read_all(source: BinaryIO) -> bytes:
    buffer = io.BytesIO()
    transfer_to(source, buffer)
    return buffer.getvalue()


__all__ = ["DEFAULT_BUFFER_SIZE", "read_all", "transfer_to"]
