"""
Rich console output for dualtrace - one row per hop as it completes
"""

from typing import Optional
from rich.console import Console
from rich.text import Text

from ..models import AddressFamily, HopResult


HOP_WIDTH = 4
CELL_WIDTH = 8
NO_REPLY = "*"


class ConsoleOutput:
    """
    Console output for traceroute results.

    Rows keep a fixed column layout; styles only add colour when the
    console is a terminal.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)

    def print_usage(self):
        """Print usage line"""
        self.console.print("Usage: traceroute [host]", markup=False)

    def print_trace_header(self, family: AddressFamily):
        """Print the section header for one address family"""
        self.console.print(Text(f"{family.label} Trace:", style="bold cyan"))

    def print_trace_end(self):
        """Print the blank line that closes a trace section"""
        self.console.print()

    def print_hop(self, hop: HopResult):
        """Print a single hop row"""
        line = Text()
        line.append(f"{hop.hop:<{HOP_WIDTH}}", style="dim")

        for rtt in hop.rtts:
            line.append(f"{self._format_rtt(rtt):<{CELL_WIDTH}}",
                        style="yellow" if rtt is None else "")

        if hop.timed_out:
            line.append(hop.host, style="yellow")
        elif hop.reached_target:
            line.append(hop.host, style="bold green")
        else:
            line.append(hop.host)

        self.console.print(line, soft_wrap=True)

    def print_error(self, message: str):
        """Print error message"""
        line = Text()
        line.append("Error:", style="bold red")
        line.append(f" {message}")
        self.console.print(line, soft_wrap=True)

    def print_interrupted(self):
        self.console.print(Text("\nInterrupted", style="yellow"))

    def _format_rtt(self, rtt: Optional[int]) -> str:
        """Format one probe cell"""
        if rtt is None:
            return NO_REPLY
        return f"{rtt} ms"
