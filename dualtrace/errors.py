"""
Exceptions raised by dualtrace
"""


class TraceError(Exception):
    """Base class for dualtrace errors"""


class ResolutionError(TraceError):
    """Forward name resolution of the target failed"""

    def __init__(self, host: str, reason: str = ""):
        self.host = host
        self.reason = reason
        message = f"could not get addresses for host {host}"
        super().__init__(message)


class ProbeError(TraceError):
    """The probe transport failed (socket, privileges, send error)"""
