"""
Public entry points for the variance-equality tests.

    f_test(samples)              two groups only
    bartlett_test(samples)       k >= 2
    levene_test(samples)         k >= 2, mean- or median-centred
    brown_forsythe_test(samples) k >= 2, median-centred Levene
    run_tests(samples, tests)    several tests on one dataset -> TrialOutcome

Every function accepts a sequence of 1D samples (or a prebuilt
VarTestDesign) and returns a VarTestResult. Degenerate data gives an
undefined result (NaN p-value plus a reason) instead of an exception.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from numpy.typing import ArrayLike

from varsim.core.exceptions import ValidationError
from varsim.vartests._common import (
    ALL_TESTS,
    TrialOutcome,
    VarTest,
    VarTestResult,
)
from varsim.vartests.backends._bartlett import bartlett_test_impl
from varsim.vartests.backends._f_test import f_test_impl
from varsim.vartests.backends._levene import levene_test_impl
from varsim.vartests.design import VarTestDesign

SamplesLike = Sequence[ArrayLike] | VarTestDesign


def f_test(samples: SamplesLike) -> VarTestResult:
    """
    F-test for equality of two variances.

    Statistic var(A)/var(B) against F(n_A - 1, n_B - 1), two-sided.

    Raises:
        GroupCountError: Unless exactly two groups are given
    """
    design = VarTestDesign.for_samples(
        samples, test=VarTest.F_TEST.value, max_groups=2,
    )
    return f_test_impl(design)


def bartlett_test(samples: SamplesLike) -> VarTestResult:
    """Bartlett's test for homogeneity of variances (chi-square, k - 1 df)."""
    design = VarTestDesign.for_samples(samples, test=VarTest.BARTLETT.value)
    return bartlett_test_impl(design)


def levene_test(samples: SamplesLike, *, center: str = 'mean') -> VarTestResult:
    """
    Levene's test for homogeneity of variances.

    Args:
        samples: Two or more 1D samples
        center: 'mean' (original Levene, default) or 'median'
            (Brown-Forsythe)
    """
    design = VarTestDesign.for_samples(samples, test=VarTest.LEVENE.value)
    return levene_test_impl(design, center=center)


def brown_forsythe_test(samples: SamplesLike) -> VarTestResult:
    """Brown-Forsythe test: Levene's test with median centering."""
    design = VarTestDesign.for_samples(samples, test=VarTest.BROWN_FORSYTHE.value)
    return levene_test_impl(design, center='median')


_DISPATCH = {
    VarTest.F_TEST: f_test_impl,
    VarTest.BARTLETT: bartlett_test_impl,
    VarTest.LEVENE: lambda d: levene_test_impl(d, center='mean'),
    VarTest.BROWN_FORSYTHE: lambda d: levene_test_impl(d, center='median'),
}


def parse_tests(tests: Iterable[VarTest | str] | None) -> tuple[VarTest, ...]:
    """
    Normalise a test selection to canonical order, without duplicates.

    None selects all four tests.
    """
    if tests is None:
        return ALL_TESTS
    if isinstance(tests, (str, VarTest)):
        tests = (tests,)
    chosen = {VarTest.parse(t) for t in tests}
    if not chosen:
        raise ValidationError("tests: at least one test must be selected")
    return tuple(t for t in ALL_TESTS if t in chosen)


def run_tests(
    samples: SamplesLike,
    tests: Iterable[VarTest | str] | None = None,
) -> TrialOutcome:
    """
    Apply several tests to one dataset.

    The samples are validated once. Requesting the F-test on anything but
    two groups raises GroupCountError.

    Returns:
        TrialOutcome in canonical test order
    """
    selected = parse_tests(tests)
    max_groups = 2 if VarTest.F_TEST in selected else None
    design = VarTestDesign.for_samples(
        samples,
        test=VarTest.F_TEST.value if max_groups else "variance tests",
        max_groups=max_groups,
    )
    return TrialOutcome(results=tuple(_DISPATCH[t](design) for t in selected))
