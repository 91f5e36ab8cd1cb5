"""
Probe contract shared by the echo probe and test doubles
"""

from abc import ABC, abstractmethod
from typing import Optional

from ..models import AddressFamily, ProbeResult


class BaseProbe(ABC):
    """
    Hop-limited echo probe bound to one address family.

    Subclasses send a single probe; `probe_batch` sends the fixed number
    of timing samples taken for one hop limit.
    """

    def __init__(self, family: Optional[AddressFamily] = None,
                 timeout_ms: int = 1000):
        self.family = family
        self.timeout_ms = timeout_ms

    @abstractmethod
    def probe(self, address: str, ttl: int) -> ProbeResult:
        """
        Send one probe with the given hop limit and wait for the reply.

        Raises:
            ProbeError: if the probe could not be sent
        """

    def probe_batch(self, address: str, ttl: int, count: int) -> list[ProbeResult]:
        """Send `count` probes one after another, all with hop limit `ttl`"""
        return [self.probe(address, ttl) for _ in range(count)]

    def close(self):
        """Release the probe's resources"""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
