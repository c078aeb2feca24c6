"""
VarTestDesign: validated input for the variance-equality tests.

Immutable after construction. Each sample is a 1D float64 array with at
least two finite observations, so every group has positive within-group
degrees of freedom.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np
from numpy.typing import NDArray, ArrayLike

from varsim.core.exceptions import GroupCountError
from varsim.core.validation import check_array, check_finite, check_min_samples


@dataclass(frozen=True)
class VarTestDesign:
    """
    Design for the variance-equality tests.

    Do not construct directly; use for_samples().
    """
    samples: tuple[NDArray[np.floating[Any]], ...]

    @property
    def k(self) -> int:
        """Number of groups."""
        return len(self.samples)

    @property
    def sizes(self) -> NDArray[np.floating[Any]]:
        """Observations per group, as float64 for the formulas."""
        return np.array([len(s) for s in self.samples], dtype=np.float64)

    @property
    def n_total(self) -> int:
        """Total observations N across groups."""
        return sum(len(s) for s in self.samples)

    @classmethod
    def for_samples(
        cls,
        samples: Sequence[ArrayLike] | VarTestDesign,
        *,
        test: str,
        max_groups: int | None = None,
    ) -> VarTestDesign:
        """
        Validate samples for `test`.

        Args:
            samples: Two or more 1D numeric samples, one per group
            test: Test name, used in error messages
            max_groups: Upper bound on the number of groups (2 for the
                F-test), or None for no bound

        Raises:
            GroupCountError: Fewer than 2 groups, or more than max_groups
            InvalidParameterError: A group with < 2 or non-finite values
        """
        if isinstance(samples, VarTestDesign):
            design = samples
        else:
            arrays = []
            for i, s in enumerate(samples):
                name = f"samples[{i}]"
                arr = check_array(s, name)
                check_finite(arr, name)
                check_min_samples(arr, 2, name)
                arrays.append(arr)
            design = cls(samples=tuple(arrays))

        k = design.k
        if k < 2 or (max_groups is not None and k > max_groups):
            if max_groups == 2:
                expected = "exactly 2"
            elif max_groups is None:
                expected = ">= 2"
            else:
                expected = f"2 to {max_groups}"
            raise GroupCountError(
                f"{test} requires {expected} groups, got {k}",
                test=test,
                expected=expected,
                actual=k,
            )
        return design
