"""
Log file decoding.

`read_log_lines(handle)` returns the decoded lines of a log file whether it
is stored plain, gzip-compressed, or zstd-compressed (rotated archives
usually are). Truncated archives and undecodable bytes are reported as
InvalidLogFileError naming the file.

This module does not parse records.
"""

from __future__ import annotations

import gzip
from typing import Callable, Dict, List

import zstandard  # type: ignore

from ..dto import Compressor, LogFileHandle
from ..errors import InvalidLogFileError


def _read_plain(path: str) -> bytes:
    with open(path, "rb") as f:
        return f.read()


def _read_gzip(path: str) -> bytes:
    with gzip.open(path, "rb") as f:
        return f.read()


def _read_zstd(path: str) -> bytes:
    with open(path, "rb") as raw:
        with zstandard.ZstdDecompressor().stream_reader(raw) as stream:
            return stream.read()


_READERS: Dict[Compressor, Callable[[str], bytes]] = {
    "none": _read_plain,
    "gzip": _read_gzip,
    "zstd": _read_zstd,
}


def read_log_bytes(handle: LogFileHandle) -> bytes:
    """Return the decompressed content of `handle`."""
    reader = _READERS.get(handle.compressor, _read_plain)
    try:
        return reader(handle.path)
    except (OSError, EOFError, zstandard.ZstdError) as e:
        raise InvalidLogFileError(handle.path, f"cannot decompress ({e})") from e


def read_log_lines(handle: LogFileHandle, encoding: str = "utf-8") -> List[str]:
    """Read and decode every line of `handle`, without line terminators."""
    data = read_log_bytes(handle)
    try:
        text = data.decode(encoding)
    except UnicodeDecodeError as e:
        raise InvalidLogFileError(
            handle.path, f"not valid {encoding} at byte offset {e.start}"
        ) from e

    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]
