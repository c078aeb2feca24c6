"""
Bartlett's test for homogeneity of variances across k >= 2 groups.

    T = [(N - k) ln Sp^2 - sum (n_i - 1) ln S_i^2] / C
    C = 1 + (sum 1/(n_i - 1) - 1/(N - k)) / (3 (k - 1))

with Sp^2 the pooled variance. T is referred to Chi-square(k - 1).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy import stats as sp_stats

from varsim.vartests._common import VarTest, VarTestResult, undefined_result

if TYPE_CHECKING:
    from varsim.vartests.design import VarTestDesign


def bartlett_test_impl(design: VarTestDesign) -> VarTestResult:
    """Bartlett's test on a validated design."""
    k = design.k
    n_i = design.sizes
    N = float(design.n_total)
    df = (float(k - 1),)

    if any(np.ptp(s) == 0 for s in design.samples):
        return undefined_result(VarTest.BARTLETT, df, "zero variance in a group")

    dof_i = n_i - 1.0
    dof_pooled = N - k
    s2_i = np.array([np.var(s, ddof=1) for s in design.samples])
    s2_pooled = float(np.sum(dof_i * s2_i) / dof_pooled)

    numerator = dof_pooled * np.log(s2_pooled) - float(np.sum(dof_i * np.log(s2_i)))
    correction = 1.0 + (np.sum(1.0 / dof_i) - 1.0 / dof_pooled) / (3.0 * (k - 1))
    statistic = float(numerator / correction)

    if not np.isfinite(statistic):
        return undefined_result(VarTest.BARTLETT, df, "non-finite statistic")

    return VarTestResult(
        test=VarTest.BARTLETT,
        statistic=statistic,
        p_value=float(sp_stats.chi2.sf(statistic, k - 1)),
        df=df,
    )
