"""
smtp_relay_audit: per-connector remote host counts from SMTP receive logs.

Public API (stable):
- AuditConfig            (configuration)
- run_audit / aggregate  (orchestrate one batch run)
- AggregationStore       (cumulative connector/host counts)
- RelayCollector         (accepted-recipient events)
- LogSourcePort, NameResolverPort, ResultSinkPort (ports)
- FilesystemLogSource, FileResultSink, DnsPythonResolver (adapters)
- DTOs: LogRecord, LogFileHandle, EndpointCount, ConnectorAggregate,
        AggregateRow, RelayEntry, ResolvedHost, FileExtract
"""

from __future__ import annotations

# Configuration
from .config import AuditConfig

# Orchestration
from .orchestration.runner import AuditResult, aggregate, run_audit

# Core
from .pipeline.aggregation import AggregationStore
from .pipeline.relay import RelayCollector

# Ports
from .ports import LogSourcePort, NameResolverPort, ResultSinkPort

# Adapters
from .intake.log_source_fs import FilesystemLogSource
from .pipeline.emitter import FileResultSink
from .pipeline.resolver import DnsPythonResolver

# DTOs
from .dto import (
    AggregateRow,
    ConnectorAggregate,
    EndpointCount,
    FileExtract,
    LogFileHandle,
    LogRecord,
    RelayEntry,
    ResolvedHost,
)

# Errors
from .errors import (
    AuditError,
    InvalidLogFileError,
    MalformedRecordError,
    MissingFieldError,
    MissingHeaderError,
    NoInputFilesError,
    SessionConnectorMismatchError,
)

__all__ = [
    "AuditConfig",
    "AuditResult",
    "aggregate",
    "run_audit",
    "AggregationStore",
    "RelayCollector",
    "LogSourcePort",
    "NameResolverPort",
    "ResultSinkPort",
    "FilesystemLogSource",
    "FileResultSink",
    "DnsPythonResolver",
    "AggregateRow",
    "ConnectorAggregate",
    "EndpointCount",
    "FileExtract",
    "LogFileHandle",
    "LogRecord",
    "RelayEntry",
    "ResolvedHost",
    "AuditError",
    "InvalidLogFileError",
    "MalformedRecordError",
    "MissingFieldError",
    "MissingHeaderError",
    "NoInputFilesError",
    "SessionConnectorMismatchError",
]
