"""
Basic log file validation.

Goal: fast, side-effect-free checks that a file *looks* like something we
can parse before we spend time decoding it. Unlike record-level problems,
a failed check here is reported with a reason the caller can raise.

We DO NOT parse the header here; the record parser does that.
"""

from __future__ import annotations

import os
from typing import Final, Optional

from ..dto import LogFileHandle

MAGIC_GZIP: Final[bytes] = bytes.fromhex("1f8b")
MAGIC_ZSTD: Final[bytes] = bytes.fromhex("28b52ffd")


def _read_head(path: str, n: int) -> bytes:
    with open(path, "rb") as f:
        return f.read(n)


def check_log_file(handle: LogFileHandle) -> Optional[str]:
    """
    Quick validation of a LogFileHandle path.

    Checks:
    - File exists and is not empty.
    - If compressor == gzip/zstd: magic bytes match the compressor.

    Returns None if checks pass, otherwise a short reason.
    """
    try:
        st = os.stat(handle.path)
    except OSError as e:
        return f"cannot stat file ({e.strerror or e})"

    if st.st_size == 0:
        return "file is empty"

    head = _read_head(handle.path, 4)

    if handle.compressor == "gzip" and head[:2] != MAGIC_GZIP:
        return "expected gzip data (bad magic bytes)"

    if handle.compressor == "zstd" and head[:4] != MAGIC_ZSTD:
        return "expected zstd data (bad magic bytes)"

    return None
