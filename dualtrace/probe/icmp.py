"""
ICMP / ICMPv6 echo probe

Packet construction, hop-limit handling and reply matching are done by
icmplib. Raw sockets are used when running privileged, otherwise the
unprivileged datagram ICMP sockets offered by Linux and macOS.
"""

import logging
import os
import time

from icmplib import (
    ICMPv4Socket, ICMPv6Socket, ICMPRequest,
    ICMPError, ICMPLibError, SocketPermissionError,
    TimeExceeded, TimeoutExceeded,
)

from ..errors import ProbeError
from ..models import AddressFamily, ProbeResult, ProbeStatus
from .base import BaseProbe

_LOG = logging.getLogger(__name__)


TIMEOUT_MS = 1000
PAYLOAD_SIZE = 32

ECHO_REPLY_TYPES = {
    AddressFamily.IPV4: 0,
    AddressFamily.IPV6: 129,
}

SOCKET_TYPES = {
    AddressFamily.IPV4: ICMPv4Socket,
    AddressFamily.IPV6: ICMPv6Socket,
}


class ICMPProbe(BaseProbe):
    """
    Echo probe for one address family.

    A single socket is opened per probe instance and reused for every
    hop limit; the hop limit is carried by each request.
    """

    def __init__(self, family: AddressFamily, timeout_ms: int = TIMEOUT_MS,
                 payload_size: int = PAYLOAD_SIZE, privileged: bool = True):
        super().__init__(family, timeout_ms)
        self.payload_size = payload_size
        self.privileged = privileged
        self.identifier = os.getpid() & 0xFFFF
        self.sequence = 0
        self._socket = self._open_socket()

    def _open_socket(self):
        """Open the icmplib socket for this family"""
        socket_type = SOCKET_TYPES[self.family]
        try:
            return socket_type(privileged=self.privileged)
        except SocketPermissionError as e:
            raise ProbeError(
                f"Insufficient privileges to send {self.family.label} "
                f"echo requests. Please run with sudo."
            ) from e
        except ICMPLibError as e:
            raise ProbeError(
                f"Cannot open {self.family.label} ICMP socket: {e}"
            ) from e

    def _next_request(self, address: str, ttl: int) -> ICMPRequest:
        self.sequence = (self.sequence + 1) & 0xFFFF
        return ICMPRequest(
            destination=address,
            id=self.identifier,
            sequence=self.sequence,
            payload_size=self.payload_size,
            ttl=ttl
        )

    def probe(self, address: str, ttl: int) -> ProbeResult:
        """Send one echo request with the given hop limit"""
        if self._socket is None:
            raise ProbeError("Probe is closed")

        request = self._next_request(address, ttl)
        start = time.perf_counter()

        try:
            self._socket.send(request)
            reply = self._socket.receive(request, self.timeout_ms / 1000)
        except TimeoutExceeded:
            _LOG.debug(f"ttl={ttl} seq={request.sequence}: timed out")
            return ProbeResult(status=ProbeStatus.TIMED_OUT)
        except ICMPLibError as e:
            raise ProbeError(f"Failed to probe {address}: {e}") from e

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        status = self._classify(reply)

        _LOG.debug(
            f"ttl={ttl} seq={request.sequence}: {status.value} "
            f"from {reply.source} in {elapsed_ms} ms"
        )
        return ProbeResult(
            status=status,
            responder=reply.source,
            rtt_ms=elapsed_ms
        )

    def _classify(self, reply) -> ProbeStatus:
        """Map an icmplib reply to a probe status"""
        try:
            reply.raise_for_status()
        except TimeExceeded:
            return ProbeStatus.TTL_EXPIRED
        except ICMPError:
            return ProbeStatus.UNREACHABLE

        if reply.type == ECHO_REPLY_TYPES[self.family]:
            return ProbeStatus.SUCCESS
        return ProbeStatus.UNREACHABLE

    def close(self):
        """Close the socket"""
        if self._socket is not None:
            self._socket.close()
            self._socket = None
