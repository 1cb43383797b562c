"""
Relay collector: a flat, append-only list of accepted-recipient events.

Independent of connector grouping. Duplicate (host, time) pairs are kept;
each is a separate acceptance.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from ..dto import RelayEntry


class RelayCollector:
    def __init__(self) -> None:
        self._entries: List[RelayEntry] = []

    def extend(self, entries: Iterable[RelayEntry]) -> None:
        self._entries.extend(entries)

    @property
    def entries(self) -> List[RelayEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[RelayEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
