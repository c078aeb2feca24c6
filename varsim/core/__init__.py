"""
Core infrastructure for varsim.

Shared abstractions used by the samplers, the test engine and the
simulation driver.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    random: Seed normalisation and sub-stream derivation
    compute: Timing utilities
"""

from varsim.core.result import Result
from varsim.core.exceptions import (
    VarSimError,
    ValidationError,
    InvalidParameterError,
    GroupCountError,
    UndefinedStatisticWarning,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "VarSimError",
    "ValidationError",
    "InvalidParameterError",
    "GroupCountError",
    "UndefinedStatisticWarning",
]
