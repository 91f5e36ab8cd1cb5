import io

import pytest
from rich.console import Console

from dualtrace.models import ProbeResult, ProbeStatus
from dualtrace.output import ConsoleOutput
from dualtrace.probe.base import BaseProbe


def reply(address: str, rtt: int = 10, status: ProbeStatus = ProbeStatus.TTL_EXPIRED) -> ProbeResult:
    return ProbeResult(status=status, responder=address, rtt_ms=rtt)


def timeout() -> ProbeResult:
    return ProbeResult(status=ProbeStatus.TIMED_OUT)


class FakeProbe(BaseProbe):
    """Probe driven by a script of ttl -> list of results (one per probe)"""

    def __init__(self, script: dict, default=None):
        super().__init__()
        self.script = script
        self.default = default or timeout
        self.calls: list[tuple[str, int]] = []
        self.closed = False

    def probe(self, address: str, ttl: int) -> ProbeResult:
        index = sum(1 for _, t in self.calls if t == ttl)
        self.calls.append((address, ttl))
        results = self.script.get(ttl)
        if results is None:
            return self.default()
        return results[index % len(results)]

    def close(self):
        self.closed = True


def route_script(hops: int, destination: str) -> dict:
    """Every probe answers; the destination answers at `hops`"""
    script = {
        ttl: [reply(f"10.0.0.{ttl}", rtt=ttl)] for ttl in range(1, hops)
    }
    script[hops] = [reply(destination, rtt=hops, status=ProbeStatus.SUCCESS)]
    return script


@pytest.fixture
def no_reverse_dns(monkeypatch):
    """Reverse lookups fail, so hosts fall back to the numeric address"""
    def fail(address):
        raise OSError("no PTR")
    monkeypatch.setattr("dualtrace.resolve.socket.gethostbyaddr", fail)


@pytest.fixture
def buffer_output():
    buffer = io.StringIO()
    console = Console(file=buffer, width=80, color_system=None, highlight=False)
    return ConsoleOutput(console), buffer
