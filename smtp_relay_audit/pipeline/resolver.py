"""
Reverse-name resolver pass.

Runs after aggregation over the distinct hosts of the AggregationStore.
Every input host appears exactly once in the output, paired with either a
name or None ("no record"). A miss for one host never stops the pass.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import dns.exception
import dns.resolver
import dns.reversename

from ..dto import ResolvedHost
from ..ports import NameResolverPort

logger = logging.getLogger("smtp_relay_audit.resolver")


class DnsPythonResolver(NameResolverPort):
    """PTR lookups through dnspython with bounded per-host time."""

    def __init__(self, *, timeout: float = 3.0, lifetime: float = 3.0) -> None:
        self._resolver = dns.resolver.Resolver()
        self._resolver.timeout = timeout
        self._resolver.lifetime = lifetime

    def reverse(self, host: str) -> Optional[str]:
        try:
            qname = dns.reversename.from_address(host)
        except (dns.exception.DNSException, ValueError):
            logger.debug("Not an IP address, skipping PTR lookup: %s", host)
            return None

        try:
            answers = self._resolver.resolve(qname, "PTR")
        except dns.exception.DNSException as e:
            # NXDOMAIN / timeouts are expected for many relays
            logger.debug("PTR lookup failed for %s: %s", host, e)
            return None

        names = sorted(str(rdata.target).rstrip(".") for rdata in answers)
        return names[0] if names else None


def resolve_hosts(hosts: Iterable[str], resolver: NameResolverPort) -> List[ResolvedHost]:
    """Resolve each distinct host once, in sorted order."""
    out: List[ResolvedHost] = []
    for host in sorted(set(hosts)):
        try:
            name = resolver.reverse(host)
        except Exception as e:
            logger.warning("Resolution failed for %s: %s", host, e)
            name = None
        out.append(ResolvedHost(host=host, name=name or None))
    return out
