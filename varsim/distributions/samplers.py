"""
Group samplers for the Normal and Exponential families.

All randomness comes from the Generator passed in; nothing touches
numpy's global state.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray

from varsim.core.exceptions import InvalidParameterError
from varsim.core.validation import check_sample_size
from varsim.distributions._common import Dataset, GroupParams, as_group_params


def sample_group(
    distribution: str,
    params: GroupParams | Sequence[float] | float,
    n: int,
    rng: np.random.Generator,
) -> NDArray[np.floating[Any]]:
    """
    Draw n i.i.d. observations for one group.

    Args:
        distribution: "normal" (mean, sd) or "exponential" (mean; rate 1/mean)
        params: GroupParams, (mean, sd) for normal, or (mean,) or a
            bare mean for exponential
        n: Number of observations, >= 2
        rng: Random generator; its state advances

    Returns:
        1D float64 array of length n

    Raises:
        InvalidParameterError: If the parameters or n are out of range
    """
    params = as_group_params(params).validate(distribution)
    n = check_sample_size(n)

    if distribution == "normal":
        return rng.normal(loc=params.mean, scale=params.sd, size=n)
    # numpy's scale is 1/rate, i.e. the mean
    return rng.exponential(scale=params.mean, size=n)


def _group_sizes(n: int | Sequence[int], k: int) -> tuple[int, ...]:
    if np.ndim(n) == 0:
        return (check_sample_size(n),) * k
    sizes = tuple(n)
    if len(sizes) != k:
        raise InvalidParameterError(
            f"n: got {len(sizes)} group sizes for {k} groups",
            parameter="n",
            value=sizes,
        )
    return tuple(check_sample_size(m, f"n[{i}]") for i, m in enumerate(sizes))


def sample_dataset(
    distribution: str,
    groups: Sequence[Any],
    n: int | Sequence[int],
    rng: np.random.Generator,
) -> Dataset:
    """
    Draw one sample per group, in group order, from a single stream.

    Args:
        distribution: Family shared by all groups
        groups: Per-group parameters in any form sample_group accepts
            (at least two groups)
        n: Common group size, or one size per group
        rng: Random generator; its state advances

    Returns:
        Dataset with len(groups) samples
    """
    if len(groups) < 2:
        raise InvalidParameterError(
            f"groups: at least 2 groups are required, got {len(groups)}",
            parameter="groups",
            value=len(groups),
        )
    params = [as_group_params(g, f"groups[{i}]") for i, g in enumerate(groups)]
    sizes = _group_sizes(n, len(params))
    samples = tuple(
        sample_group(distribution, g, m, rng) for g, m in zip(params, sizes)
    )
    return Dataset(samples=samples, distribution=distribution)
