"""
Configuration for the relay audit pipeline.

Two layers:
- AuditConfig: validated, immutable knobs for one run (pydantic).
- RuntimeSettings: process-level settings (logging) read from the
  environment, overridable from the command line.
"""

from __future__ import annotations

import os
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SUCCESS_MARKER = "250 2.1.5 Recipient OK"

OutputFormat = Literal["json", "csv"]


class AuditConfig(BaseModel):
    """
    Centralized, validated configuration for one audit run.
    """

    model_config = ConfigDict(frozen=True)

    # === Intake ===
    preamble_lines: int = Field(
        default=4,
        ge=0,
        description="Comment lines preceding the '#Fields:' header in each log file.",
    )
    encoding: str = Field(
        default="utf-8",
        description="Text encoding of the (decompressed) log files.",
    )

    # === Success filter ===
    success_marker: str = Field(
        default=SUCCESS_MARKER,
        min_length=1,
        description="Case-sensitive substring of the `data` field marking an accepted recipient.",
    )

    # === Output ===
    output_format: OutputFormat = Field(
        default="json",
        description="Serialization of the aggregate and resolver outputs.",
    )

    # === Optional stages ===
    resolve_names: bool = Field(
        default=False,
        description="Run the reverse-DNS pass over every distinct host.",
    )
    export_relay: bool = Field(
        default=False,
        description="Collect (source host, time) for every accepted recipient.",
    )

    # === Name resolution ===
    dns_timeout_seconds: float = Field(
        default=3.0,
        gt=0.0,
        description="Per-server timeout for one PTR query.",
    )
    dns_lifetime_seconds: float = Field(
        default=3.0,
        gt=0.0,
        description="Total time budget for resolving one host.",
    )


class RuntimeSettings:
    """Process settings; override via environment variables."""

    LOG_FILE = os.getenv("SMTP_AUDIT_LOG_FILE", "")
    LOG_LEVEL = os.getenv("SMTP_AUDIT_LOG_LEVEL", "INFO")
