"""
Session grouping.

Responsibilities (kept minimal, one thing each):
- Partition one file's records by session id, preserving arrival order.
- Nest the sessions under the connector that accepted them.

Notes
-----
- Sessions never span files; grouping state is per file and discarded after
  extraction.
- A session whose records name different connectors violates the log
  contract and raises instead of being split or guessed.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..dto import LogRecord
from ..errors import SessionConnectorMismatchError

Sessions = Dict[str, List[LogRecord]]


def group_sessions(records: Iterable[LogRecord]) -> Sessions:
    """Map session id -> records of that session, in original order."""
    sessions: Sessions = {}
    for rec in records:
        sessions.setdefault(rec.session_id, []).append(rec)
    return sessions


def group_by_connector(records: Iterable[LogRecord], *, source: str) -> Dict[str, Sessions]:
    """
    Map connector id -> (session id -> records).

    Connectors and sessions appear in first-seen order.
    """
    by_connector: Dict[str, Sessions] = {}
    for session_id, recs in group_sessions(records).items():
        connector = recs[0].connector_id
        for rec in recs[1:]:
            if rec.connector_id != connector:
                raise SessionConnectorMismatchError(
                    source,
                    session_id,
                    sorted({r.connector_id for r in recs}),
                    line_no=rec.line_no,
                )
        by_connector.setdefault(connector, {})[session_id] = recs
    return by_connector
