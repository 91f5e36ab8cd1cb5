import logging
import os
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .errors import ProbeError, ResolutionError
from .output import ConsoleOutput
from .probe import Tracer
from .resolve import resolve_host

_LOG = logging.getLogger(__name__)


def is_admin() -> bool:
    """Check if running with elevated privileges (admin on Windows, root on Linux)"""
    if sys.platform == 'win32':
        try:
            import ctypes
            return ctypes.windll.shell32.IsUserAnAdmin() != 0
        except (AttributeError, OSError):
            return False
    else:
        return os.geteuid() == 0


def privileges_message() -> str:
    if sys.platform == 'win32':
        return ("Administrator privileges required. "
                "Please run PowerShell as Administrator.")
    return "Root privileges required. Please run with sudo."


def setup_logging(verbose: bool):
    """Send log records to stderr so they never mix with trace rows"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


@click.command()
@click.argument('host', required=False)
@click.option('-v', '--verbose', is_flag=True,
              help='Log resolution and per-probe details to stderr')
@click.version_option(version=__version__, prog_name='traceroute')
def main(host: Optional[str], verbose: bool):
    """
    Trace the route to HOST over IPv4 and then IPv6.

    Each hop is probed three times with ICMP echo requests; the
    destination's IPv4 trace is printed first, followed by its IPv6
    trace when the host has an IPv6 address.

    Examples:

        traceroute example.com

        traceroute 2606:4700:4700::1111
    """
    setup_logging(verbose)
    output = ConsoleOutput()

    if host is None:
        output.print_usage()
        return

    # Unprivileged ICMP sockets only see Time Exceeded replies on macOS
    privileged = is_admin()
    if not privileged:
        if sys.platform != 'darwin':
            output.print_error(privileges_message())
            return
        _LOG.warning(
            "Not running as root, using unprivileged ICMP sockets"
        )

    try:
        try:
            destinations = resolve_host(host)
        except ResolutionError as e:
            _LOG.debug(f"Resolution failed: {e.reason}")
            output.print_error(str(e))
            return

        for destination in destinations:
            output.print_trace_header(destination.family)
            tracer = Tracer(destination, privileged=privileged)
            try:
                tracer.trace(on_hop=output.print_hop)
            except ProbeError as e:
                output.print_error(str(e))
            output.print_trace_end()
    except KeyboardInterrupt:
        output.print_interrupted()
        sys.exit(130)


if __name__ == '__main__':
    main()
