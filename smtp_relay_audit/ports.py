"""
Hexagonal interfaces (Ports) for the audit pipeline.

These define the boundary between the aggregation core and its I/O
collaborators. Keep them small so they're easy to fake in tests.
"""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .dto import AggregateRow, LogFileHandle, RelayEntry, ResolvedHost


class LogSourcePort(Protocol):
    """Supplies the log files selected for one run."""

    pattern: str  # human-readable selection, used in error messages

    def fetch(self) -> Iterable[LogFileHandle]:
        """Return the selected files in a stable (sorted) order."""
        ...


class NameResolverPort(Protocol):
    """Best-effort reverse name lookup."""

    def reverse(self, host: str) -> Optional[str]:
        """
        Return the resolved name for `host`, or None when no record exists.
        Implementations MUST NOT raise for lookup failures.
        """
        ...


class ResultSinkPort(Protocol):
    """Receives the serialized outputs of a finished run."""

    def write_aggregates(self, rows: Sequence[AggregateRow]) -> None:
        """Write the flattened AggregationStore."""
        ...

    def write_resolved(self, entries: Sequence[ResolvedHost]) -> None:
        """Write the resolver pass output."""
        ...

    def write_relay(self, entries: Sequence[RelayEntry]) -> None:
        """Write relay events; called only when at least one exists."""
        ...
