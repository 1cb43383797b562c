"""
Record parser: turns the decoded lines of one log file into LogRecords.

File layout
-----------
  #Software: Microsoft Exchange Server       \
  #Version: 15.0.0.0                          | preamble (default 4 lines),
  #Log-type: SMTP Receive Protocol Log        | dropped unread
  #Date: 2024-03-01T00:00:01.000Z            /
  #Fields: date-time,connector-id,session-id,...   <- header
  2024-03-01T00:00:01.112Z,EX01\\Default,08DC...   <- one record per line

Each line is split on its own with the csv module, so quoted values
containing commas (common in the `data` and `context` fields) stay intact
and a stray quote cannot pull in the lines after it. A record whose
width differs from the header is a hard failure for the whole file.
"""

from __future__ import annotations

import csv
from typing import Iterable, List, Sequence

from ..dto import REQUIRED_FIELDS, LogRecord
from ..errors import MalformedRecordError, MissingFieldError, MissingHeaderError

HEADER_PREFIXES = ("#Fields:", "#")


def parse_header(line: str) -> List[str]:
    """Strip the comment marker from a header line and split the field names."""
    text = line
    for prefix in HEADER_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):]
            break
    return [name.strip() for name in next(csv.reader([text.strip()]), [])]


def parse_records(
    lines: Sequence[str],
    *,
    source: str,
    preamble_lines: int = 4,
) -> List[LogRecord]:
    """
    Parse one file's lines into LogRecords in file order.

    Parameters
    ----------
    lines : Sequence[str]
        Decoded lines, terminators removed.
    source : str
        File path, used only in error messages.
    preamble_lines : int
        Number of leading comment lines to drop before the header.

    Raises
    ------
    MissingHeaderError, MissingFieldError, MalformedRecordError
    """
    if len(lines) <= preamble_lines:
        raise MissingHeaderError(source, preamble_lines)

    header = parse_header(lines[preamble_lines])
    missing = [name for name in REQUIRED_FIELDS if name not in header]
    if missing:
        raise MissingFieldError(source, missing)

    # line numbers are 1-based; data starts right after the header
    first_data_line = preamble_lines + 2
    return list(_iter_records(lines[preamble_lines + 1:], header, source, first_data_line))


def _iter_records(
    body: Iterable[str],
    header: List[str],
    source: str,
    first_line_no: int,
) -> Iterable[LogRecord]:
    width = len(header)
    for line_no, line in enumerate(body, start=first_line_no):
        if not line:
            continue  # blank line
        try:
            row = next(csv.reader([line]))
        except csv.Error as e:
            raise MalformedRecordError(source, line_no, width, 0, detail=str(e)) from e
        if len(row) != width:
            raise MalformedRecordError(source, line_no, width, len(row))
        yield LogRecord(values=dict(zip(header, row)), line_no=line_no)
