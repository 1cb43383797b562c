"""
Result emission to files.

The primary output is the flattened AggregationStore. Optional outputs are
written beside it:

- resolver : <dir>/<stem>-dns<suffix>      (same format as primary)
- relay    : <dir>/<stem>.relay.csv        (always CSV)

JSON is written as a list of objects; delimited tables go through pandas.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, List, Sequence

import pandas as pd

from ..config import OutputFormat
from ..dto import AggregateRow, RelayEntry, ResolvedHost
from ..ports import ResultSinkPort

AGGREGATE_COLUMNS = ["connector", "host", "count"]
RESOLVED_COLUMNS = ["host", "name"]
RELAY_COLUMNS = ["source_host", "event_time"]


def derive_dns_path(path: str | Path) -> Path:
    p = Path(path)
    return p.with_name(f"{p.stem}-dns{p.suffix}")


def derive_relay_path(path: str | Path) -> Path:
    p = Path(path)
    return p.with_name(f"{p.stem}.relay.csv")


class FileResultSink(ResultSinkPort):
    """
    Writes run outputs next to a caller-chosen primary path.

    Parameters
    ----------
    path : str | Path
        Primary output file; parent directories are created on write.
    fmt : "json" | "csv"
        Serialization for the aggregate and resolver outputs.
    """

    def __init__(self, path: str | Path, fmt: OutputFormat = "json") -> None:
        self.path = Path(path)
        self.fmt = fmt
        self.written: List[Path] = []

    @property
    def dns_path(self) -> Path:
        return derive_dns_path(self.path)

    @property
    def relay_path(self) -> Path:
        return derive_relay_path(self.path)

    # --- ResultSinkPort ---

    def write_aggregates(self, rows: Sequence[AggregateRow]) -> None:
        self._write(self.path, [asdict(r) for r in rows], AGGREGATE_COLUMNS, self.fmt)

    def write_resolved(self, entries: Sequence[ResolvedHost]) -> None:
        self._write(self.dns_path, [asdict(e) for e in entries], RESOLVED_COLUMNS, self.fmt)

    def write_relay(self, entries: Sequence[RelayEntry]) -> None:
        records = [
            {"source_host": e.source_host, "event_time": e.event_time.isoformat()}
            for e in entries
        ]
        self._write(self.relay_path, records, RELAY_COLUMNS, "csv")

    # --- helpers ---

    def _write(
        self,
        path: Path,
        records: List[Dict[str, Any]],
        columns: List[str],
        fmt: OutputFormat,
    ) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        if fmt == "json":
            path.write_text(json.dumps(records, ensure_ascii=False, indent=2), encoding="utf-8")
        else:
            pd.DataFrame.from_records(records, columns=columns).to_csv(path, index=False)
        self.written.append(path)
