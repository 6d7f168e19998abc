"""Filesystem helpers for incremental conversion."""
from __future__ import annotations

import contextlib
import io
import os
import shutil
import sys
from pathlib import Path
from typing import Iterator, Optional, TextIO


STREAM_MARKER = "-"


def is_stream(path: Optional[Path]) -> bool:
    return path is None or str(path) == STREAM_MARKER


def is_up_to_date(source: Path, destination: Path) -> bool:
    """True when ``destination`` exists and is not older than ``source``."""
    if not destination.exists():
        return False
    return destination.stat().st_mtime >= source.stat().st_mtime


def sync_timestamps(source: Path, destination: Path) -> None:
    """Give ``destination`` the access and modification times of ``source``."""
    stat = source.stat()
    os.utime(destination, ns=(stat.st_atime_ns, stat.st_mtime_ns))


def copy_file(source: Path, destination: Path) -> Path:
    destination.parent.mkdir(parents=True, exist_ok=True)
    return Path(shutil.copy2(source, destination))


@contextlib.contextmanager
def _binary_stream_text(stream: TextIO, encoding: str) -> Iterator[TextIO]:
    """Re-wrap a standard stream's byte buffer with surrogateescape.

    The wrapper is detached afterwards so the real stream stays open.
    Streams without a byte buffer are used as they are.
    """
    buffer = getattr(stream, "buffer", None)
    if buffer is None:
        yield stream
        stream.flush()
        return
    stream.flush()
    wrapper = io.TextIOWrapper(buffer, encoding=encoding, errors="surrogateescape", newline="")
    try:
        yield wrapper
    finally:
        wrapper.flush()
        wrapper.detach()


@contextlib.contextmanager
def open_source(path: Optional[Path], encoding: str = "utf-8") -> Iterator[TextIO]:
    """Open ``path`` for reading, or yield stdin for ``-``/``None``."""
    if is_stream(path):
        with _binary_stream_text(sys.stdin, encoding) as handle:
            yield handle
        return
    # surrogateescape keeps undecodable bytes intact on the way back out
    with open(path, "r", encoding=encoding, errors="surrogateescape", newline="") as handle:
        yield handle


@contextlib.contextmanager
def open_destination(path: Optional[Path], encoding: str = "utf-8") -> Iterator[TextIO]:
    """Open ``path`` for writing, or yield stdout for ``-``/``None``."""
    if is_stream(path):
        with _binary_stream_text(sys.stdout, encoding) as handle:
            yield handle
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding=encoding, errors="surrogateescape", newline="") as handle:
        yield handle


__all__ = [
    "STREAM_MARKER",
    "copy_file",
    "is_stream",
    "is_up_to_date",
    "open_destination",
    "open_source",
    "sync_timestamps",
]
