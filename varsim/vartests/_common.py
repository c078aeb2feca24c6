"""
Common types for the variance-equality tests.

VarTest names the four procedures; VarTestResult is what every procedure
returns; TrialOutcome collects one result per test for a single dataset.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Iterator

from varsim.core.exceptions import ValidationError


class VarTest(str, Enum):
    """The variance-equality tests, in canonical order."""
    F_TEST = "F-test"
    BARTLETT = "Bartlett"
    LEVENE = "Levene"
    BROWN_FORSYTHE = "Brown-Forsythe"

    @classmethod
    def parse(cls, value: VarTest | str) -> VarTest:
        """Accept an enum member, its value, or a loose alias ('f', 'bf')."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-").replace(" ", "-")
        try:
            return _ALIASES[key]
        except KeyError:
            raise ValidationError(
                f"unknown test {value!r}; expected one of "
                f"{[t.value for t in cls]}"
            ) from None


_ALIASES = {
    "f": VarTest.F_TEST,
    "f-test": VarTest.F_TEST,
    "var-test": VarTest.F_TEST,
    "bartlett": VarTest.BARTLETT,
    "levene": VarTest.LEVENE,
    "levene-mean": VarTest.LEVENE,
    "brown-forsythe": VarTest.BROWN_FORSYTHE,
    "levene-median": VarTest.BROWN_FORSYTHE,
    "bf": VarTest.BROWN_FORSYTHE,
}

ALL_TESTS: tuple[VarTest, ...] = tuple(VarTest)


@dataclass(frozen=True)
class VarTestResult:
    """
    Outcome of one test on one dataset.

    Attributes
    ----------
    test : VarTest
        Which procedure produced this result.
    statistic : float
        Test statistic (F, Bartlett's K-squared, or Levene's W). NaN when
        undefined.
    p_value : float
        In [0, 1], or NaN when the statistic is undefined.
    df : tuple of float
        Degrees of freedom of the reference distribution: one value for
        Bartlett's chi-square, two for the F-based tests.
    reason : str or None
        Why the statistic is undefined (e.g. a zero-variance group);
        None for a defined result.
    """
    test: VarTest
    statistic: float
    p_value: float
    df: tuple[float, ...]
    reason: str | None = None

    @property
    def defined(self) -> bool:
        return self.reason is None and not math.isnan(self.p_value)


def undefined_result(
    test: VarTest,
    df: tuple[float, ...],
    reason: str,
) -> VarTestResult:
    """Result for a dataset on which `test` has no defined statistic."""
    return VarTestResult(
        test=test,
        statistic=float("nan"),
        p_value=float("nan"),
        df=df,
        reason=reason,
    )


@dataclass(frozen=True)
class TrialOutcome(Mapping):
    """
    Read-only mapping VarTest -> VarTestResult for one dataset.

    Iteration follows the order the tests were run in.
    """
    results: tuple[VarTestResult, ...]

    def __getitem__(self, test: VarTest | str) -> VarTestResult:
        try:
            test = VarTest.parse(test)
        except ValidationError:
            raise KeyError(test) from None
        for result in self.results:
            if result.test is test:
                return result
        raise KeyError(test)

    def __iter__(self) -> Iterator[VarTest]:
        return (r.test for r in self.results)

    def __len__(self) -> int:
        return len(self.results)

    def p_values(self) -> dict[VarTest, float]:
        """p-value per test (NaN where undefined)."""
        return {r.test: r.p_value for r in self.results}
