"""
Aggregation store: the single mutable state of a run.

Maps connector name -> ConnectorAggregate (host -> EndpointCount). Every
file's tallies are merged in as soon as that file is extracted. Merging only
ever adds, so the final counts do not depend on the order files arrive in,
and nothing is removed during a run.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Set

from ..dto import AggregateRow, ConnectorAggregate, EndpointCount, FileExtract


class AggregationStore:
    """
    Cumulative (connector, host) -> count map.

    Usage:
        store = AggregationStore()
        store.merge("EX01\\Default Frontend EX01", {"10.0.0.1": 2})
        store.merge_extract(extract)
        rows = store.rows()
    """

    def __init__(self) -> None:
        self._connectors: Dict[str, ConnectorAggregate] = {}

    # --- mutation ---

    def merge(self, connector: str, host_counts: Mapping[str, int]) -> None:
        """Add `host_counts` to the connector's endpoints, creating either as needed."""
        agg = self._connectors.get(connector)
        if agg is None:
            agg = ConnectorAggregate(name=connector)
            self._connectors[connector] = agg

        for host, count in host_counts.items():
            count = int(count)
            if count < 1:
                raise ValueError(f"count for {host!r} under {connector!r} must be >= 1, got {count}")
            entry = agg.endpoints.get(host)
            if entry is None:
                agg.endpoints[host] = EndpointCount(host=host, count=count)
            else:
                entry.count += count

    def merge_extract(self, extract: FileExtract) -> None:
        """Merge every connector tally of one file."""
        for connector, hosts in extract.host_counts.items():
            self.merge(connector, hosts)

    def update(self, other: "AggregationStore") -> None:
        """Fold another store into this one (e.g. one built per worker)."""
        for agg in other:
            self.merge(agg.name, {h: e.count for h, e in agg.endpoints.items()})

    # --- queries ---

    def __iter__(self) -> Iterator[ConnectorAggregate]:
        return iter(self._connectors.values())

    def __len__(self) -> int:
        return len(self._connectors)

    def __contains__(self, connector: object) -> bool:
        return connector in self._connectors

    def connectors(self) -> List[str]:
        return sorted(self._connectors)

    def get(self, connector: str) -> ConnectorAggregate | None:
        return self._connectors.get(connector)

    def count(self, connector: str, host: str) -> int:
        """Current count for (connector, host); 0 if never observed."""
        agg = self._connectors.get(connector)
        if agg is None:
            return 0
        entry = agg.endpoints.get(host)
        return entry.count if entry is not None else 0

    def hosts(self) -> Set[str]:
        """Distinct hosts across every connector."""
        seen: Set[str] = set()
        for agg in self._connectors.values():
            seen.update(agg.endpoints)
        return seen

    def rows(self) -> List[AggregateRow]:
        """Flatten to (connector, host, count) rows sorted by connector, then host."""
        out: List[AggregateRow] = []
        for name in sorted(self._connectors):
            agg = self._connectors[name]
            for host in sorted(agg.endpoints):
                out.append(AggregateRow(connector=name, host=host, count=agg.endpoints[host].count))
        return out
