"""
Tests for equality of variance.

Public API:
    f_test(samples) -> VarTestResult               # two groups
    bartlett_test(samples) -> VarTestResult        # k >= 2
    levene_test(samples, center=...) -> VarTestResult
    brown_forsythe_test(samples) -> VarTestResult
    run_tests(samples, tests) -> TrialOutcome
"""

from varsim.vartests._common import (
    ALL_TESTS,
    TrialOutcome,
    VarTest,
    VarTestResult,
)
from varsim.vartests.design import VarTestDesign
from varsim.vartests.solvers import (
    bartlett_test,
    brown_forsythe_test,
    f_test,
    levene_test,
    parse_tests,
    run_tests,
)

__all__ = [
    "ALL_TESTS",
    "TrialOutcome",
    "VarTest",
    "VarTestResult",
    "VarTestDesign",
    "bartlett_test",
    "brown_forsythe_test",
    "f_test",
    "levene_test",
    "parse_tests",
    "run_tests",
]
