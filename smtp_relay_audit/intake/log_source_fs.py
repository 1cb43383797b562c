"""
Filesystem-backed LogSource adapter.

It enumerates protocol log files matching a glob pattern, e.g.
  /var/log/exchange/SmtpReceive/RECV*.LOG
  logs/**/*.log.gz

This module is intentionally simple:
- It does NOT open files; validation (size, magic bytes) happens later.
- It infers compression from the filename suffix; validator will double-check.
- Files are returned sorted by path so a run is reproducible.
"""

from __future__ import annotations

import glob
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from ..dto import Compressor, LogFileHandle
from ..ports import LogSourcePort

COMP_SUFFIXES: Tuple[Tuple[str, Compressor], ...] = (
    (".zst", "zstd"),
    (".gz", "gzip"),
)


@dataclass(frozen=True)
class FilesystemLogSource(LogSourcePort):
    """
    Enumerate log files matching a glob pattern.

    Parameters
    ----------
    pattern : str
        Glob pattern; `**` matches recursively.
    """

    pattern: str

    def fetch(self) -> Iterable[LogFileHandle]:
        paths = sorted(glob.glob(self.pattern, recursive=True))
        handles: List[LogFileHandle] = []
        for raw in paths:
            p = Path(raw)
            if not p.is_file():
                continue
            handles.append(
                LogFileHandle(
                    id=p.name,
                    path=str(p),
                    compressor=_infer_compressor(p.name),
                )
            )
        return handles


# === Helpers ===


def _infer_compressor(name: str) -> Compressor:
    lower = name.lower()
    for suffix, comp in COMP_SUFFIXES:
        if lower.endswith(suffix):
            return comp
    return "none"
