"""
Probe engines for dualtrace
"""

from .base import BaseProbe
from .icmp import ICMPProbe
from .tracer import Tracer, MAX_HOPS, PROBE_COUNT, REQUEST_TIMED_OUT

__all__ = [
    'BaseProbe', 'ICMPProbe', 'Tracer',
    'MAX_HOPS', 'PROBE_COUNT', 'REQUEST_TIMED_OUT',
]
