"""
Levene's test for homogeneity of variances.

Algorithm: transform y to Z_ij = |y_ij - center_i|, then run a one-way
ANOVA on Z:

    W = [(N - k) / (k - 1)] * sum n_i (Zbar_i - Zbar)^2 / sum sum (Z_ij - Zbar_i)^2

referred to F(k - 1, N - k). center='mean' is Levene's original test;
center='median' is the Brown-Forsythe variant (plain median substitution,
no trimming correction).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
from scipy import stats as sp_stats

from varsim.vartests._common import VarTest, VarTestResult, undefined_result

if TYPE_CHECKING:
    from varsim.vartests.design import VarTestDesign

# Within-group dispersion of Z at or below this fraction of sum(Z^2) is
# rounding noise (e.g. two-point groups under median centering).
_DEGENERATE_RTOL = 1e-20


def levene_test_impl(
    design: VarTestDesign,
    *,
    center: str = 'mean',
) -> VarTestResult:
    """
    Levene's test (or Brown-Forsythe variant) on a validated design.

    Args:
        design: Validated samples, k >= 2
        center: 'mean' (Levene) or 'median' (Brown-Forsythe)
    """
    if center not in ('mean', 'median'):
        raise ValueError(f"center must be 'mean' or 'median', got {center!r}")

    test = VarTest.LEVENE if center == 'mean' else VarTest.BROWN_FORSYTHE
    center_fn = np.mean if center == 'mean' else np.median

    k = design.k
    N = design.n_total
    df_between = float(k - 1)
    df_within = float(N - k)
    df = (df_between, df_within)

    z_groups = [np.abs(s - center_fn(s)) for s in design.samples]
    z_means = np.array([np.mean(z) for z in z_groups])
    n_i = design.sizes
    z_grand_mean = float(np.sum(n_i * z_means) / N)

    ss_between = float(np.sum(n_i * (z_means - z_grand_mean) ** 2))
    ss_within = float(sum(np.sum((z - m) ** 2) for z, m in zip(z_groups, z_means)))
    ss_scale = float(sum(np.sum(z ** 2) for z in z_groups))

    if ss_within <= _DEGENERATE_RTOL * ss_scale:
        return undefined_result(test, df, "zero within-group dispersion")

    w_stat = (df_within / df_between) * ss_between / ss_within
    if not np.isfinite(w_stat):
        return undefined_result(test, df, "non-finite statistic")

    return VarTestResult(
        test=test,
        statistic=w_stat,
        p_value=float(sp_stats.f.sf(w_stat, df_between, df_within)),
        df=df,
    )
