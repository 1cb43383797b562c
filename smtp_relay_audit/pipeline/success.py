"""
Success filter and endpoint extraction.

For every record of every session, a record whose `data` field contains the
success marker (exact, case-sensitive substring) counts as one accepted
recipient. Its remote endpoint host is tallied under the record's connector;
when relay collection is on, (host, time) is also kept as a RelayEntry.

Only a bad timestamp is tolerated here, and only for the relay stream:
the host still counts toward the aggregate.
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Iterable, Optional, Tuple

from ..config import AuditConfig
from ..dto import FileExtract, LogRecord, RelayEntry
from .grouping import group_by_connector

logger = logging.getLogger("smtp_relay_audit.success")


def is_success(record: LogRecord, marker: str) -> bool:
    return marker in record.data


def split_endpoint(value: str) -> Tuple[str, str]:
    """
    Split a `host:port` endpoint into (host, port).

    The host is everything before the first colon; a bracketed IPv6 literal
    ("[2001:db8::1]:25") is unwrapped. A value without a port yields port "".
    """
    value = value.strip()
    if value.startswith("["):
        host, sep, rest = value[1:].partition("]")
        if sep:
            return host, rest.lstrip(":")
    host, _, port = value.partition(":")
    return host, port


def parse_event_time(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 `date-time` value; None when it cannot be parsed."""
    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def extract_file(
    records: Iterable[LogRecord],
    *,
    source: str,
    cfg: AuditConfig,
    file_id: Optional[str] = None,
) -> FileExtract:
    """
    Run grouping + success filtering over one file's records.

    Returns a FileExtract with one host Counter per connector that had at
    least one accepted recipient. Counts keep multiplicity: one per
    successful record, not one per distinct host.
    """
    records = list(records)
    out = FileExtract(file_id=file_id or source, records=len(records))

    for connector, sessions in group_by_connector(records, source=source).items():
        out.sessions += len(sessions)
        hosts: Counter = Counter()
        for recs in sessions.values():
            for rec in recs:
                if not is_success(rec, cfg.success_marker):
                    continue
                host, _ = split_endpoint(rec.remote_endpoint)
                hosts[host] += 1
                out.success_events += 1

                if not cfg.export_relay:
                    continue
                ts = parse_event_time(rec.date_time)
                if ts is None:
                    out.relay_skipped += 1
                    logger.debug(
                        "%s:%d: unparsable date-time %r; not exported to relay",
                        source,
                        rec.line_no,
                        rec.date_time,
                    )
                    continue
                out.relay.append(RelayEntry(source_host=host, event_time=ts))
        if hosts:
            out.host_counts[connector] = hosts

    return out
