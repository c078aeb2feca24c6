"""
Shared compute infrastructure for varsim.

Submodules:
    timing: Execution timing utilities
"""

from varsim.core.compute.timing import Timer, timed

__all__ = [
    "Timer",
    "timed",
]
