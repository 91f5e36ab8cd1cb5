"""
dualtrace - Dual-stack traceroute

Traces the route to a host over IPv4 and then IPv6 using ICMP echo
probes with an increasing hop limit.
"""

__version__ = "1.0.0"
__author__ = "dualtrace"
