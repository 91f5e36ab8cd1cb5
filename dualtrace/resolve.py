"""
Forward and reverse name resolution
"""

import logging
import socket
from typing import Optional

from .errors import ResolutionError
from .models import AddressFamily, Destination

_LOG = logging.getLogger(__name__)


def resolve_host(host: str) -> list[Destination]:
    """
    Resolve a hostname with the system resolver.

    Keeps at most one address per family, the last one returned for
    that family.

    Args:
        host: Hostname or literal IP address

    Returns:
        Destinations in tracing order (IPv4 first). A family with no
        address is left out.

    Raises:
        ResolutionError: if the lookup itself fails
    """
    try:
        infos = socket.getaddrinfo(host, None)
    except (socket.gaierror, socket.herror, UnicodeError, OSError) as e:
        _LOG.debug(f"Lookup for {host!r} failed: {e}")
        raise ResolutionError(host, str(e)) from e

    found: dict[AddressFamily, str] = {}
    for family, _, _, _, sockaddr in infos:
        address_family = AddressFamily.from_socket_family(family)
        if address_family is None:
            continue
        found[address_family] = sockaddr[0]

    destinations = [
        Destination(address=found[family], family=family)
        for family in AddressFamily
        if family in found
    ]
    _LOG.debug(f"Resolved {host!r} to {[d.address for d in destinations]}")
    return destinations


def reverse_lookup(address: str) -> str:
    """Reverse-resolve an address, falling back to the address itself"""
    hostname: Optional[str] = None
    try:
        hostname, _, _ = socket.gethostbyaddr(address)
    except (socket.herror, socket.gaierror, socket.timeout, OSError) as e:
        _LOG.debug(f"No reverse name for {address}: {e}")
    return hostname or address
