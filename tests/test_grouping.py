"""
Session grouping tests.
"""

import pytest

from smtp_relay_audit.dto import LogRecord
from smtp_relay_audit.errors import SessionConnectorMismatchError
from smtp_relay_audit.pipeline.grouping import group_by_connector, group_sessions

from conftest import FIELDS, row

pytestmark = pytest.mark.unit


def _records(rows):
    return [LogRecord(values=dict(zip(FIELDS, r)), line_no=i + 6) for i, r in enumerate(rows)]


def test_group_sessions_preserves_order_within_session():
    recs = _records([row("A", seq=0), row("B", seq=0), row("A", seq=1), row("B", seq=1), row("A", seq=2)])
    sessions = group_sessions(recs)

    assert list(sessions) == ["A", "B"]
    assert [r["sequence-number"] for r in sessions["A"]] == ["0", "1", "2"]
    assert [r["sequence-number"] for r in sessions["B"]] == ["0", "1"]


def test_group_by_connector_nests_sessions():
    recs = _records([
        row("A", connector="C1"),
        row("B", connector="C2"),
        row("C", connector="C1"),
        row("A", connector="C1", seq=1),
    ])
    grouped = group_by_connector(recs, source="a.log")

    assert list(grouped) == ["C1", "C2"]
    assert list(grouped["C1"]) == ["A", "C"]
    assert len(grouped["C1"]["A"]) == 2
    assert list(grouped["C2"]) == ["B"]


def test_session_spanning_connectors_is_rejected():
    recs = _records([row("A", connector="C1"), row("A", connector="C2", seq=1)])
    with pytest.raises(SessionConnectorMismatchError) as exc:
        group_by_connector(recs, source="/logs/x.log")

    assert exc.value.session_id == "A"
    assert exc.value.connectors == ("C1", "C2")
    assert "/logs/x.log:7" in str(exc.value)
