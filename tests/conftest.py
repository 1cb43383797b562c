"""
Pytest configuration and fixtures for smtp_relay_audit tests.
"""

import csv
import io

import pytest

from smtp_relay_audit.config import AuditConfig

FIELDS = [
    "date-time",
    "connector-id",
    "session-id",
    "sequence-number",
    "local-endpoint",
    "remote-endpoint",
    "event",
    "data",
    "context",
]

PREAMBLE = [
    "#Software: Microsoft Exchange Server",
    "#Version: 15.0.0.0",
    "#Log-type: SMTP Receive Protocol Log",
    "#Date: 2024-03-01T00:00:01.000Z",
]

CONNECTOR = "EX01\\Default Frontend EX01"
OK = "250 2.1.5 Recipient OK"


def row(
    session,
    remote="10.0.0.1:41000",
    data="",
    connector=CONNECTOR,
    when="2024-03-01T10:00:00.000Z",
    seq=0,
    event="<",
):
    """One record as a field list in FIELDS order."""
    return [when, connector, session, str(seq), "10.15.5.173:25", remote, event, data, ""]


def render_log(rows, *, preamble=PREAMBLE, fields=FIELDS):
    """Render a complete log file body."""
    buf = io.StringIO()
    for line in preamble:
        buf.write(line + "\r\n")
    buf.write("#Fields: " + ",".join(fields) + "\r\n")
    writer = csv.writer(buf, lineterminator="\r\n")
    for r in rows:
        writer.writerow(r)
    return buf.getvalue()


def session_rows(session, remote="10.0.0.1:41000", connector=CONNECTOR, accepted=1):
    """A plausible receive session with `accepted` successful RCPT TO replies."""
    rows = [
        row(session, remote, "", connector, seq=0, event="+"),
        row(session, remote, "220 EX01 Microsoft ESMTP MAIL Service ready", connector, seq=1, event=">"),
        row(session, remote, "EHLO relay.example.net", connector, seq=2),
        row(session, remote, "MAIL FROM:<a@example.net>", connector, seq=3),
        row(session, remote, "250 2.1.0 Sender OK", connector, seq=4, event=">"),
    ]
    for i in range(accepted):
        rows.append(row(session, remote, f"RCPT TO:<u{i}@example.org>", connector, seq=5 + 2 * i))
        rows.append(row(session, remote, OK, connector, seq=6 + 2 * i, event=">"))
    rows.append(row(session, remote, "QUIT", connector, seq=99))
    rows.append(row(session, remote, "", connector, seq=100, event="-"))
    return rows


@pytest.fixture
def cfg():
    return AuditConfig()


@pytest.fixture
def write_log(tmp_path):
    """Factory: write rows as a log file under tmp_path/logs and return its path."""
    log_dir = tmp_path / "logs"
    log_dir.mkdir(exist_ok=True)

    def _write(name, rows, **kwargs):
        path = log_dir / name
        path.write_text(render_log(rows, **kwargs), encoding="utf-8", newline="")
        return path

    return _write


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "unit: mark test as a unit test")
