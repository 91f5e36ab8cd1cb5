"""
Data models for dualtrace
"""

import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class AddressFamily(Enum):
    """Address families traced, in the order they are traced"""
    IPV4 = 4
    IPV6 = 6

    @property
    def label(self) -> str:
        return f"IPv{self.value}"

    @property
    def socket_family(self) -> int:
        if self is AddressFamily.IPV4:
            return socket.AF_INET
        return socket.AF_INET6

    @classmethod
    def from_socket_family(cls, family: int) -> Optional['AddressFamily']:
        if family == socket.AF_INET:
            return cls.IPV4
        if family == socket.AF_INET6:
            return cls.IPV6
        return None


@dataclass(frozen=True)
class Destination:
    """Resolved address of the trace target"""
    address: str
    family: AddressFamily


class ProbeStatus(Enum):
    """Outcome of a single echo probe"""
    SUCCESS = "success"          # echo reply from the destination
    TTL_EXPIRED = "ttl_expired"  # time exceeded from an intermediate hop
    UNREACHABLE = "unreachable"  # any other ICMP error
    TIMED_OUT = "timed_out"


@dataclass
class ProbeResult:
    """Result of a single probe"""
    status: ProbeStatus = ProbeStatus.TIMED_OUT
    responder: Optional[str] = None
    rtt_ms: Optional[int] = None

    @property
    def timed_out(self) -> bool:
        return self.status is ProbeStatus.TIMED_OUT


@dataclass
class HopResult:
    """
    Result of probing a single hop limit (multiple probes).

    `address`, `host` and `status` all come from the last probe of the
    batch; `rtts` holds one entry per probe.
    """
    hop: int
    rtts: list[Optional[int]] = field(default_factory=list)
    address: Optional[str] = None
    host: str = ""
    status: ProbeStatus = ProbeStatus.TIMED_OUT

    @property
    def reached_target(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    @property
    def timed_out(self) -> bool:
        return self.status is ProbeStatus.TIMED_OUT


@dataclass
class Trace:
    """Ordered hops for one destination address"""
    destination: Destination
    hops: list[HopResult] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return bool(self.hops) and self.hops[-1].reached_target
