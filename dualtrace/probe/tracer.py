"""
Traceroute loop for a single destination address
"""

import logging
from typing import Callable, Optional

from ..models import Destination, HopResult, ProbeResult, Trace
from ..resolve import reverse_lookup
from .base import BaseProbe
from .icmp import ICMPProbe, TIMEOUT_MS

_LOG = logging.getLogger(__name__)


MAX_HOPS = 30
PROBE_COUNT = 3
REQUEST_TIMED_OUT = "Request timed out."


class Tracer:
    """
    Traceroute for one destination address.

    Probes hop limits 1..max_hops with a fixed number of probes per hop.
    Only the last probe of each batch decides the hop's host column and
    whether the destination has been reached.
    """

    def __init__(
        self,
        destination: Destination,
        max_hops: int = MAX_HOPS,
        probes_per_hop: int = PROBE_COUNT,
        timeout_ms: int = TIMEOUT_MS,
        privileged: bool = True
    ):
        self.destination = destination
        self.max_hops = max_hops
        self.probes_per_hop = probes_per_hop
        self.timeout_ms = timeout_ms
        self.privileged = privileged

    def _create_probe(self) -> BaseProbe:
        """Create the probe for the destination's address family"""
        return ICMPProbe(
            self.destination.family,
            timeout_ms=self.timeout_ms,
            privileged=self.privileged
        )

    def _host_for(self, last: ProbeResult) -> str:
        if last.timed_out or not last.responder:
            return REQUEST_TIMED_OUT
        return reverse_lookup(last.responder)

    def trace(
        self,
        on_hop: Optional[Callable[[HopResult], None]] = None
    ) -> Trace:
        """
        Execute the trace.

        Args:
            on_hop: Optional callback invoked as soon as each hop is done

        Returns:
            Trace with one HopResult per probed hop limit

        Raises:
            ProbeError: if the probe transport fails
        """
        result = Trace(destination=self.destination)
        address = self.destination.address

        _LOG.debug(f"Tracing {address} ({self.destination.family.label})")

        with self._create_probe() as probe:
            for ttl in range(1, self.max_hops + 1):
                results = probe.probe_batch(address, ttl, self.probes_per_hop)
                last = results[-1] if results else ProbeResult()
                rtts: list[Optional[int]] = [
                    None if r.timed_out else r.rtt_ms for r in results
                ]

                hop = HopResult(
                    hop=ttl,
                    rtts=rtts,
                    address=last.responder,
                    host=self._host_for(last),
                    status=last.status
                )
                result.hops.append(hop)

                if on_hop:
                    on_hop(hop)

                if hop.reached_target:
                    break

        _LOG.debug(
            f"Trace to {address} finished after {len(result.hops)} hops "
            f"(completed={result.completed})"
        )
        return result
