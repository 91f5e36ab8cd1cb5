import socket

import pytest

from dualtrace.errors import ResolutionError
from dualtrace.models import AddressFamily, Destination
from dualtrace.resolve import resolve_host, reverse_lookup


def addrinfo(*addresses):
    infos = []
    for address in addresses:
        if ":" in address:
            infos.append((socket.AF_INET6, socket.SOCK_STREAM, 6, "", (address, 0, 0, 0)))
        else:
            infos.append((socket.AF_INET, socket.SOCK_STREAM, 6, "", (address, 0)))
    return infos


@pytest.fixture
def fake_getaddrinfo(monkeypatch):
    def install(*addresses):
        monkeypatch.setattr(
            "dualtrace.resolve.socket.getaddrinfo",
            lambda host, port: addrinfo(*addresses)
        )
    return install


def test_ipv4_only(fake_getaddrinfo):
    fake_getaddrinfo("93.184.216.34")
    assert resolve_host("example.com") == [
        Destination("93.184.216.34", AddressFamily.IPV4)
    ]


def test_ipv6_only(fake_getaddrinfo):
    fake_getaddrinfo("2606:2800:220:1::1")
    destinations = resolve_host("example.com")
    assert [d.family for d in destinations] == [AddressFamily.IPV6]


def test_ipv4_traced_before_ipv6(fake_getaddrinfo):
    fake_getaddrinfo("2606:2800:220:1::1", "93.184.216.34")
    destinations = resolve_host("example.com")
    assert [d.family for d in destinations] == [AddressFamily.IPV4, AddressFamily.IPV6]


def test_keeps_last_address_of_each_family(fake_getaddrinfo):
    fake_getaddrinfo("192.0.2.1", "2001:db8::1", "192.0.2.2", "2001:db8::2")
    destinations = resolve_host("example.com")
    assert [d.address for d in destinations] == ["192.0.2.2", "2001:db8::2"]


def test_no_addresses(fake_getaddrinfo):
    fake_getaddrinfo()
    assert resolve_host("example.com") == []


def test_lookup_failure(monkeypatch):
    def fail(host, port):
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    monkeypatch.setattr("dualtrace.resolve.socket.getaddrinfo", fail)
    with pytest.raises(ResolutionError) as exc_info:
        resolve_host("no-such-host.invalid")
    assert str(exc_info.value) == "could not get addresses for host no-such-host.invalid"
    assert exc_info.value.host == "no-such-host.invalid"


def test_reverse_lookup_name(monkeypatch):
    monkeypatch.setattr(
        "dualtrace.resolve.socket.gethostbyaddr",
        lambda address: ("one.one.one.one", [], [address])
    )
    assert reverse_lookup("1.1.1.1") == "one.one.one.one"


@pytest.mark.parametrize("error", [
    socket.herror(1, "Unknown host"),
    socket.gaierror(socket.EAI_NONAME, "Name or service not known"),
    OSError("boom"),
])
def test_reverse_lookup_falls_back_to_address(monkeypatch, error):
    def fail(address):
        raise error

    monkeypatch.setattr("dualtrace.resolve.socket.gethostbyaddr", fail)
    assert reverse_lookup("2001:db8::1") == "2001:db8::1"
