"""
Fatal error types raised by the audit pipeline.

Every message names the offending file and, where one exists, the 1-based
line number, so an operator can jump straight to the bad input.
"""

from __future__ import annotations

from typing import Iterable, Optional


class AuditError(Exception):
    """Base class for errors that end an audit run."""


class NoInputFilesError(AuditError, FileNotFoundError):
    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"No log files match pattern: {pattern}")


class InvalidLogFileError(AuditError, ValueError):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MissingHeaderError(AuditError, ValueError):
    def __init__(self, path: str, preamble_lines: int) -> None:
        self.path = path
        super().__init__(
            f"{path}: no field header found after {preamble_lines} preamble line(s)"
        )


class MissingFieldError(AuditError, ValueError):
    def __init__(self, path: str, missing: Iterable[str]) -> None:
        self.path = path
        self.missing = tuple(missing)
        super().__init__(f"{path}: header lacks required field(s): {', '.join(self.missing)}")


class MalformedRecordError(AuditError, ValueError):
    def __init__(
        self,
        path: str,
        line_no: int,
        expected: int,
        got: int,
        detail: Optional[str] = None,
    ) -> None:
        self.path = path
        self.line_no = line_no
        self.expected = expected
        self.got = got
        reason = detail or f"expected {expected} field(s) per header, got {got}"
        super().__init__(f"{path}:{line_no}: {reason}")


class SessionConnectorMismatchError(AuditError, ValueError):
    def __init__(
        self,
        path: str,
        session_id: str,
        connectors: Iterable[str],
        line_no: Optional[int] = None,
    ) -> None:
        self.path = path
        self.session_id = session_id
        self.connectors = tuple(connectors)
        where = f"{path}:{line_no}" if line_no is not None else path
        super().__init__(
            f"{where}: session {session_id} spans connectors {', '.join(self.connectors)}"
        )
