"""
Population samplers.

Usage:
    import numpy as np
    from varsim.distributions import GroupParams, sample_group, sample_dataset

    rng = np.random.default_rng(42)
    a = sample_group("normal", GroupParams(mean=5.0, sd=1.0), 100, rng)
    ds = sample_dataset(
        "exponential", (GroupParams(mean=1.0), GroupParams(mean=2.0)), 50, rng,
    )
"""

from varsim.distributions._common import (
    VALID_DISTRIBUTIONS,
    Dataset,
    GroupParams,
    as_group_params,
)
from varsim.distributions.samplers import sample_group, sample_dataset

__all__ = [
    "VALID_DISTRIBUTIONS",
    "Dataset",
    "GroupParams",
    "as_group_params",
    "sample_group",
    "sample_dataset",
]
