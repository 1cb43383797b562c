"""
Run orchestration: one batch audit over every selected log file.

Control flow
------------
1. Enumerate files from the LogSourcePort; none is a fatal error.
2. For each file, in order: validate -> decode -> parse -> group/filter ->
   merge into the AggregationStore (and append relay entries).
3. Only when every file succeeded, write the aggregate through the sink.
4. Optional stages, each independent of the other:
   - resolver pass over the store's distinct hosts
   - relay export (skipped when no entry was collected)

Any fatal error in step 1-2 propagates before anything is written, so a bad
file never leaves a partial result behind.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import AuditConfig
from ..dto import LogFileHandle, ResolvedHost
from ..errors import InvalidLogFileError, NoInputFilesError
from ..intake.decompress import read_log_lines
from ..intake.record_parser import parse_records
from ..intake.validator import check_log_file
from ..pipeline.aggregation import AggregationStore
from ..pipeline.relay import RelayCollector
from ..pipeline.resolver import resolve_hosts
from ..pipeline.success import extract_file
from ..ports import LogSourcePort, NameResolverPort, ResultSinkPort

logger = logging.getLogger("smtp_relay_audit.runner")


@dataclass
class AuditResult:
    store: AggregationStore
    relay: RelayCollector
    resolved: Optional[List[ResolvedHost]] = None
    metrics: Dict[str, int] = field(default_factory=dict)


def process_file(
    handle: LogFileHandle,
    cfg: AuditConfig,
    store: AggregationStore,
    relay: RelayCollector,
    metrics: Dict[str, int],
) -> None:
    """Parse one file and fold its contribution into `store` / `relay`."""
    reason = check_log_file(handle)
    if reason is not None:
        raise InvalidLogFileError(handle.path, reason)

    lines = read_log_lines(handle, encoding=cfg.encoding)
    records = parse_records(lines, source=handle.path, preamble_lines=cfg.preamble_lines)
    extract = extract_file(records, source=handle.path, cfg=cfg, file_id=handle.id)

    store.merge_extract(extract)
    if cfg.export_relay:
        relay.extend(extract.relay)

    metrics["files_processed"] += 1
    metrics["records_parsed"] += extract.records
    metrics["sessions_seen"] += extract.sessions
    metrics["success_events"] += extract.success_events
    metrics["relay_entries"] += len(extract.relay)
    metrics["relay_timestamps_skipped"] += extract.relay_skipped

    logger.info(
        "%s: %d records, %d sessions, %d accepted recipients",
        handle.id,
        extract.records,
        extract.sessions,
        extract.success_events,
    )


def aggregate(
    source: LogSourcePort,
    cfg: AuditConfig,
    *,
    pbar=None,
) -> AuditResult:
    """Steps 1-2: build the store (and relay list) without writing anything."""
    handles = list(source.fetch())
    if not handles:
        raise NoInputFilesError(source.pattern)

    metrics: Dict[str, int] = {
        "files_seen": len(handles),
        "files_processed": 0,
        "records_parsed": 0,
        "sessions_seen": 0,
        "success_events": 0,
        "relay_entries": 0,
        "relay_timestamps_skipped": 0,
    }
    store = AggregationStore()
    relay = RelayCollector()
    if pbar is not None:
        pbar.reset(total=len(handles))

    for handle in handles:
        if pbar is not None:
            pbar.set_description(f"Processing: {handle.id}")
        process_file(handle, cfg, store, relay, metrics)
        if pbar is not None:
            pbar.update()

    return AuditResult(store=store, relay=relay, metrics=metrics)


def run_audit(
    source: LogSourcePort,
    sink: ResultSinkPort,
    cfg: AuditConfig,
    *,
    resolver: Optional[NameResolverPort] = None,
    pbar=None,
) -> AuditResult:
    """
    Execute a full audit run and write its outputs through `sink`.

    `resolver` is required when cfg.resolve_names is set.
    """
    if cfg.resolve_names and resolver is None:
        raise ValueError("resolve_names is enabled but no resolver was supplied")

    result = aggregate(source, cfg, pbar=pbar)
    store = result.store

    sink.write_aggregates(store.rows())
    logger.info(
        "Aggregated %d connector(s), %d distinct host(s)",
        len(store),
        len(store.hosts()),
    )

    if cfg.resolve_names and resolver is not None:
        result.resolved = resolve_hosts(store.hosts(), resolver)
        hits = sum(1 for r in result.resolved if r.name is not None)
        result.metrics["hosts_resolved"] = hits
        result.metrics["hosts_unresolved"] = len(result.resolved) - hits
        sink.write_resolved(result.resolved)

    if cfg.export_relay and result.relay:
        sink.write_relay(result.relay.entries)

    logger.info("Run metrics: %s", result.metrics)
    return result
