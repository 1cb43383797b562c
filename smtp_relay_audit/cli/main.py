"""
Entry point for the smtp-relay-audit command.

Counts, per receive connector, the remote hosts that had recipients
accepted, across every log file matching a glob pattern.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from tqdm import tqdm

from ..config import AuditConfig, RuntimeSettings
from ..errors import AuditError
from ..intake.log_source_fs import FilesystemLogSource
from ..orchestration.runner import run_audit
from ..pipeline.emitter import FileResultSink
from ..pipeline.resolver import DnsPythonResolver
from ..utils import init_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smtp-relay-audit",
        description="Aggregate SMTP receive protocol logs into per-connector remote host counts.",
    )
    parser.add_argument("pattern", help="Glob pattern selecting log files (quote it; ** recurses).")
    parser.add_argument("-o", "--output", required=True, help="Primary output file path.")
    parser.add_argument(
        "-f",
        "--format",
        choices=("json", "csv"),
        default="json",
        help="Output format for the aggregate and DNS files (default: json).",
    )
    parser.add_argument("--dns", action="store_true", help="Reverse-resolve every distinct host.")
    parser.add_argument(
        "--relay",
        action="store_true",
        help="Also export (source host, time) per accepted recipient to <output>.relay.csv.",
    )
    parser.add_argument(
        "--preamble-lines",
        type=int,
        default=4,
        help="Comment lines before the '#Fields:' header (default: 4).",
    )
    parser.add_argument("--dns-timeout", type=float, default=3.0, help="Seconds per PTR lookup.")
    parser.add_argument("--log-level", default=RuntimeSettings.LOG_LEVEL)
    parser.add_argument("--log-file", default=RuntimeSettings.LOG_FILE or None)
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = init_logging(args.log_level, args.log_file)

    cfg = AuditConfig(
        preamble_lines=args.preamble_lines,
        output_format=args.format,
        resolve_names=args.dns,
        export_relay=args.relay,
        dns_timeout_seconds=args.dns_timeout,
        dns_lifetime_seconds=args.dns_timeout,
    )
    source = FilesystemLogSource(args.pattern)
    sink = FileResultSink(args.output, cfg.output_format)
    resolver = (
        DnsPythonResolver(timeout=cfg.dns_timeout_seconds, lifetime=cfg.dns_lifetime_seconds)
        if cfg.resolve_names
        else None
    )

    pbar = None if args.no_progress else tqdm(unit="file")
    try:
        run_audit(source, sink, cfg, resolver=resolver, pbar=pbar)
    except AuditError as e:
        logger.error("%s", e)
        return 1
    finally:
        if pbar is not None:
            pbar.close()

    for path in sink.written:
        logger.info("Wrote %s", path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
