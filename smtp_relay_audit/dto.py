"""
Data Transfer Objects (DTOs) used across the audit pipeline.

These are intentionally small and independent of any I/O or DNS libraries.
Per-file structures (LogRecord, FileExtract) are transient; ConnectorAggregate
and EndpointCount live for the whole run inside the AggregationStore.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Literal, Mapping, Optional, Tuple

Compressor = Literal["none", "gzip", "zstd"]

# Field names every receive-log header must declare
FIELD_DATE_TIME = "date-time"
FIELD_CONNECTOR = "connector-id"
FIELD_SESSION = "session-id"
FIELD_REMOTE_ENDPOINT = "remote-endpoint"
FIELD_DATA = "data"

REQUIRED_FIELDS: Tuple[str, ...] = (
    FIELD_DATE_TIME,
    FIELD_CONNECTOR,
    FIELD_SESSION,
    FIELD_REMOTE_ENDPOINT,
    FIELD_DATA,
)


# === Intake ===
@dataclass(frozen=True)
class LogFileHandle:
    """One protocol log file selected for processing."""
    id: str                  # stable identifier (file name)
    path: str                # filesystem path
    compressor: Compressor


# === Parsed line ===
@dataclass(frozen=True)
class LogRecord:
    """
    One data line of one log file, keyed by the declared header.

    `values` preserves header order; fields outside REQUIRED_FIELDS are kept
    but never interpreted.
    """
    values: Mapping[str, str]
    line_no: int             # 1-based line number in the source file

    def __getitem__(self, name: str) -> str:
        return self.values[name]

    @property
    def date_time(self) -> str:
        return self.values[FIELD_DATE_TIME]

    @property
    def connector_id(self) -> str:
        return self.values[FIELD_CONNECTOR]

    @property
    def session_id(self) -> str:
        return self.values[FIELD_SESSION]

    @property
    def remote_endpoint(self) -> str:
        return self.values[FIELD_REMOTE_ENDPOINT]

    @property
    def data(self) -> str:
        return self.values[FIELD_DATA]


# === Aggregation ===
@dataclass
class EndpointCount:
    """Successful-recipient events seen from `host` under one connector."""
    host: str
    count: int


@dataclass
class ConnectorAggregate:
    """Accumulator for one connector; host keys are unique."""
    name: str
    endpoints: Dict[str, EndpointCount] = field(default_factory=dict)


@dataclass(frozen=True)
class AggregateRow:
    """Flattened (connector, host, count) row for serialization."""
    connector: str
    host: str
    count: int


# === Relay / resolver ===
@dataclass(frozen=True)
class RelayEntry:
    source_host: str
    event_time: datetime


@dataclass(frozen=True)
class ResolvedHost:
    host: str
    name: Optional[str]      # None means "no record"


# === Per-file extraction result ===
@dataclass
class FileExtract:
    """Everything one file contributes to the run, before merging."""
    file_id: str
    host_counts: Dict[str, Counter] = field(default_factory=dict)   # connector -> Counter(host)
    relay: List[RelayEntry] = field(default_factory=list)
    records: int = 0
    sessions: int = 0
    success_events: int = 0
    relay_skipped: int = 0
