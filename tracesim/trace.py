"""Reading compressed traces of 32-bit program counters."""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from contextlib import contextmanager
from typing import BinaryIO

_WORD_SIZE = 4


class TraceError(Exception):
    """Raised when a trace cannot be opened or holds no usable data."""


def read_words(stream: BinaryIO) -> Iterator[int]:
    """Yield little-endian 32-bit words until the stream runs out."""
    while len(chunk := stream.read(_WORD_SIZE)) == _WORD_SIZE:
        yield int.from_bytes(chunk, "little")


@contextmanager
def open_trace(path: str) -> Iterator[Iterator[int]]:
    """Decompress ``path`` with bzcat and yield its words."""
    try:
        process = subprocess.Popen(["bzcat", path], stdout=subprocess.PIPE)
    except OSError as exc:
        raise TraceError(f"Failed to open file {path}: {exc}") from exc
    try:
        yield read_words(process.stdout)
    finally:
        process.stdout.close()
        process.wait()