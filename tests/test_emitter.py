"""
Output serialization tests.
"""

import json
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import pytest

from smtp_relay_audit.dto import AggregateRow, RelayEntry, ResolvedHost
from smtp_relay_audit.pipeline.emitter import FileResultSink, derive_dns_path, derive_relay_path

pytestmark = pytest.mark.unit

ROWS = [AggregateRow("C1", "1.2.3.4", 8), AggregateRow("C2", "10.0.0.1", 1)]


def test_derived_paths():
    assert derive_dns_path("/out/result.json") == Path("/out/result-dns.json")
    assert derive_dns_path("/out/result.csv") == Path("/out/result-dns.csv")
    assert derive_relay_path("/out/result.json") == Path("/out/result.relay.csv")
    assert derive_relay_path("result") == Path("result.relay.csv")


def test_json_aggregates(tmp_path):
    sink = FileResultSink(tmp_path / "nested" / "out.json", "json")
    sink.write_aggregates(ROWS)

    data = json.loads((tmp_path / "nested" / "out.json").read_text(encoding="utf-8"))
    assert data == [
        {"connector": "C1", "host": "1.2.3.4", "count": 8},
        {"connector": "C2", "host": "10.0.0.1", "count": 1},
    ]
    assert sink.written == [tmp_path / "nested" / "out.json"]


def test_csv_aggregates(tmp_path):
    out = tmp_path / "out.csv"
    FileResultSink(out, "csv").write_aggregates(ROWS)

    df = pd.read_csv(out)
    assert list(df.columns) == ["connector", "host", "count"]
    assert df.to_dict("records")[0] == {"connector": "C1", "host": "1.2.3.4", "count": 8}


def test_empty_csv_keeps_header(tmp_path):
    out = tmp_path / "out.csv"
    FileResultSink(out, "csv").write_aggregates([])
    assert out.read_text(encoding="utf-8").strip() == "connector,host,count"


def test_resolved_json_has_explicit_null(tmp_path):
    sink = FileResultSink(tmp_path / "out.json", "json")
    sink.write_resolved([ResolvedHost("A", "a.example.net"), ResolvedHost("B", None)])

    data = json.loads((tmp_path / "out-dns.json").read_text(encoding="utf-8"))
    assert data == [{"host": "A", "name": "a.example.net"}, {"host": "B", "name": None}]


def test_resolved_csv_leaves_name_empty(tmp_path):
    sink = FileResultSink(tmp_path / "out.csv", "csv")
    sink.write_resolved([ResolvedHost("A", "a.example.net"), ResolvedHost("B", None)])

    lines = (tmp_path / "out-dns.csv").read_text(encoding="utf-8").splitlines()
    assert lines == ["host,name", "A,a.example.net", "B,"]


def test_relay_is_always_csv(tmp_path):
    ts = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
    sink = FileResultSink(tmp_path / "out.json", "json")
    sink.write_relay([RelayEntry("1.1.1.1", ts), RelayEntry("1.1.1.1", ts)])

    lines = (tmp_path / "out.relay.csv").read_text(encoding="utf-8").splitlines()
    assert lines == [
        "source_host,event_time",
        "1.1.1.1,2024-03-01T10:00:00+00:00",
        "1.1.1.1,2024-03-01T10:00:00+00:00",
    ]
