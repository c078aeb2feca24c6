"""
Common data structures for the simulation driver and sweep aggregator.

SimulationParams and SweepParams are the payloads wrapped by Result[P]
and exposed through the Solution classes. Arrays are made read-only
before they are stored.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np
from numpy.typing import NDArray

from varsim.vartests._common import TrialOutcome, VarTest


def frozen_array(values, dtype=np.float64) -> NDArray:
    """Copy `values` into a read-only array."""
    arr = np.array(values, dtype=dtype)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True)
class SimulationParams:
    """
    Parameter payload for one simulation (R trials of one config).

    - outcomes: the R TrialOutcomes, in trial order
    - p_values: shape (R, m), column j belongs to tests[j]; NaN = undefined
    - statistics: shape (R, m), same layout
    """
    tests: tuple[VarTest, ...]
    outcomes: tuple[TrialOutcome, ...]
    p_values: NDArray[np.floating[Any]]        # shape (R, m)
    statistics: NDArray[np.floating[Any]]      # shape (R, m)
    R: int

    def column(self, test: VarTest | str) -> int:
        test = VarTest.parse(test)
        try:
            return self.tests.index(test)
        except ValueError:
            raise KeyError(
                f"{test.value} was not run in this simulation; "
                f"available: {[t.value for t in self.tests]}"
            ) from None


@dataclass(frozen=True)
class RejectionSummary:
    """
    Rejection proportion of one test at one configuration.

    proportion = (#p < alpha) / n_defined. Undefined p-values are not in
    the denominator; they are counted in n_undefined. mc_se is the
    binomial Monte Carlo standard error sqrt(p (1 - p) / n_defined).
    """
    proportion: float
    n_rejected: int
    n_defined: int
    n_undefined: int
    mc_se: float


def summarize_rejections(
    p_values: NDArray[np.floating[Any]],
    alpha: float,
) -> RejectionSummary:
    """Reduce a vector of p-values to a RejectionSummary at level alpha."""
    p_values = np.asarray(p_values, dtype=np.float64)
    defined = ~np.isnan(p_values)
    n_defined = int(np.count_nonzero(defined))
    n_undefined = int(p_values.size - n_defined)

    if n_defined == 0:
        return RejectionSummary(
            proportion=math.nan,
            n_rejected=0,
            n_defined=0,
            n_undefined=n_undefined,
            mc_se=math.nan,
        )

    n_rejected = int(np.count_nonzero(p_values[defined] < alpha))
    proportion = n_rejected / n_defined
    return RejectionSummary(
        proportion=proportion,
        n_rejected=n_rejected,
        n_defined=n_defined,
        n_undefined=n_undefined,
        mc_se=math.sqrt(proportion * (1.0 - proportion) / n_defined),
    )


@dataclass(frozen=True)
class SweepPoint:
    """
    One grid value and each test's rejection summary at that value.
    """
    value: Any
    rejections: Mapping[VarTest, RejectionSummary]    # read-only view

    def rejection(self, test: VarTest | str) -> float:
        """Rejection proportion for `test` (NaN if no trial was defined)."""
        return self.rejections[VarTest.parse(test)].proportion


@dataclass(frozen=True)
class SweepParams:
    """
    Parameter payload for a sweep.

    - points: one SweepPoint per grid value, in grid order
    - simulations: the SimulationParams each point was reduced from
    """
    varying: str
    tests: tuple[VarTest, ...]
    points: tuple[SweepPoint, ...]
    simulations: tuple[SimulationParams, ...]
    alpha: float
    R: int
