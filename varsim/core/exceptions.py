"""
Exception hierarchy for varsim.

All exceptions inherit from VarSimError so callers can catch any
library-specific error in one place.

Configuration problems (bad parameters, wrong number of groups) are raised
before any sampling happens. A degenerate draw inside a simulation is not an
error: the affected test result is marked undefined and reported through
UndefinedStatisticWarning instead.
"""

from typing import Any


class VarSimError(Exception):
    """Base exception for all varsim errors."""
    pass


class ValidationError(VarSimError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A distribution or simulation parameter is out of range.

    Raised for non-positive scales or means, sample sizes below 2,
    non-finite values, or an invalid significance level. Values are
    never clamped.

    Attributes:
        parameter: Name of the offending parameter
        value: The rejected value
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value


class GroupCountError(ValidationError):
    """
    A test was given the wrong number of groups.

    Attributes:
        test: Name of the test that was invoked
        expected: Description of the accepted group count (e.g. '2', '>= 2')
        actual: Number of groups supplied
    """

    def __init__(
        self,
        message: str,
        test: str | None = None,
        expected: str | None = None,
        actual: int | None = None,
    ):
        super().__init__(message)
        self.test = test
        self.expected = expected
        self.actual = actual


class UndefinedStatisticWarning(RuntimeWarning):
    """
    Some trials produced an undefined test statistic.

    Emitted once per simulation when at least one trial had, e.g., a
    zero-variance group. Those p-values are NaN and are excluded from
    rejection-proportion denominators.
    """
    pass
