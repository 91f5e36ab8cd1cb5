"""
Output modules for dualtrace
"""

from .console import ConsoleOutput

__all__ = ['ConsoleOutput']
