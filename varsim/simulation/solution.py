"""
Solution wrappers for simulation and sweep results.

SimulationSolution and SweepSolution wrap Result[P] and expose the raw
numbers (p-value vectors, rejection proportions per grid value) as plain
arrays for plotting and reporting, plus a text summary().
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from varsim.core.result import Result
from varsim.simulation._common import (
    RejectionSummary,
    SimulationParams,
    SweepParams,
    SweepPoint,
    summarize_rejections,
)
from varsim.vartests._common import TrialOutcome, VarTest

if TYPE_CHECKING:
    from varsim.simulation.design import SimulationConfig, SimulationDesign, SweepDesign


@dataclass
class SimulationSolution:
    """
    User-facing result of R trials at one configuration.
    """
    _result: Result[SimulationParams]
    _design: 'SimulationDesign'

    # --- Core fields ---

    @property
    def R(self) -> int:
        """Number of trials."""
        return self._result.params.R

    @property
    def tests(self) -> tuple[VarTest, ...]:
        """Tests applied in every trial."""
        return self._result.params.tests

    @property
    def outcomes(self) -> tuple[TrialOutcome, ...]:
        """The R TrialOutcomes, in trial order."""
        return self._result.params.outcomes

    @property
    def p_values(self) -> dict[VarTest, NDArray[np.floating[Any]]]:
        """Read-only p-value vector of length R per test (NaN = undefined)."""
        params = self._result.params
        return {t: params.p_values[:, j] for j, t in enumerate(params.tests)}

    @property
    def statistics(self) -> dict[VarTest, NDArray[np.floating[Any]]]:
        """Read-only statistic vector of length R per test."""
        params = self._result.params
        return {t: params.statistics[:, j] for j, t in enumerate(params.tests)}

    def p_value(self, test: VarTest | str) -> NDArray[np.floating[Any]]:
        """p-values of one test across the R trials."""
        params = self._result.params
        return params.p_values[:, params.column(test)]

    def rejections(self, alpha: float | None = None) -> dict[VarTest, RejectionSummary]:
        """Rejection summary per test at `alpha` (default: config alpha)."""
        alpha = self.config.alpha if alpha is None else alpha
        return {t: summarize_rejections(p, alpha) for t, p in self.p_values.items()}

    def rejection_rate(self, test: VarTest | str, alpha: float | None = None) -> float:
        """Proportion of defined trials with p < alpha."""
        alpha = self.config.alpha if alpha is None else alpha
        return summarize_rejections(self.p_value(test), alpha).proportion

    def n_undefined(self, test: VarTest | str) -> int:
        """Trials whose statistic for `test` was undefined."""
        return int(np.count_nonzero(np.isnan(self.p_value(test))))

    # --- Metadata ---

    @property
    def config(self) -> 'SimulationConfig':
        return self._design.config

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """
        Rejection table at the configured alpha.

            VARIANCE TEST SIMULATION

            Distribution: normal, groups: 2, n = (100, 100), R = 500
            alpha = 0.05

                      Test   Rejected    Rate   MC s.e.  Undefined
                    F-test        208  0.4160    0.0220          0
        """
        config = self.config
        lines = [
            "\nVARIANCE TEST SIMULATION\n",
            f"Distribution: {config.distribution}, groups: {config.k}, "
            f"n = {config.n}, R = {self.R}",
            f"alpha = {config.alpha:g}",
            "",
            f"{'Test':>16s} {'Rejected':>10s} {'Rate':>8s} "
            f"{'MC s.e.':>9s} {'Undefined':>10s}",
        ]
        for test, s in self.rejections().items():
            lines.append(
                f"{test.value:>16s} {s.n_rejected:10d} {s.proportion:8.4f} "
                f"{s.mc_se:9.4f} {s.n_undefined:10d}"
            )
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SimulationSolution(distribution={self.config.distribution!r}, "
            f"n={self.config.n}, R={self.R}, "
            f"tests={[t.value for t in self.tests]})"
        )


@dataclass
class SweepSolution:
    """
    User-facing result of a one-parameter sweep.

    Grid order is preserved in every accessor.
    """
    _result: Result[SweepParams]
    _design: 'SweepDesign'

    # --- Core fields ---

    @property
    def varying(self) -> str:
        """Name of the varied parameter."""
        return self._result.params.varying

    @property
    def points(self) -> tuple[SweepPoint, ...]:
        """One SweepPoint per grid value."""
        return self._result.params.points

    @property
    def values(self) -> NDArray:
        """Grid values as an array."""
        return np.array([p.value for p in self.points])

    @property
    def tests(self) -> tuple[VarTest, ...]:
        return self._result.params.tests

    @property
    def alpha(self) -> float:
        return self._result.params.alpha

    @property
    def R(self) -> int:
        """Trials per grid point."""
        return self._result.params.R

    def rejection(self, test: VarTest | str) -> NDArray[np.floating[Any]]:
        """Rejection proportion of `test` at each grid value."""
        test = VarTest.parse(test)
        return np.array([p.rejections[test].proportion for p in self.points])

    def mc_se(self, test: VarTest | str) -> NDArray[np.floating[Any]]:
        """Monte Carlo standard error of each rejection proportion."""
        test = VarTest.parse(test)
        return np.array([p.rejections[test].mc_se for p in self.points])

    def n_undefined(self, test: VarTest | str) -> NDArray[np.integer[Any]]:
        """Undefined trials of `test` at each grid value."""
        test = VarTest.parse(test)
        return np.array([p.rejections[test].n_undefined for p in self.points])

    def p_values(self, index: int) -> dict[VarTest, NDArray[np.floating[Any]]]:
        """Raw p-value vectors of grid point `index`."""
        sim = self._result.params.simulations[index]
        return {t: sim.p_values[:, j] for j, t in enumerate(sim.tests)}

    def to_records(self) -> list[dict[str, Any]]:
        """
        Flat rows for plotting or report tables, one per (grid value, test).
        """
        records = []
        for point in self.points:
            for test, s in point.rejections.items():
                records.append({
                    self.varying: point.value,
                    'test': test.value,
                    'rejection': s.proportion,
                    'n_rejected': s.n_rejected,
                    'n_defined': s.n_defined,
                    'n_undefined': s.n_undefined,
                    'mc_se': s.mc_se,
                })
        return records

    # --- Metadata ---

    @property
    def base_config(self) -> 'SimulationConfig':
        return self._design.base_config

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Display ---

    def summary(self) -> str:
        """Rejection proportions, one row per grid value, one column per test."""
        lines = [
            "\nVARIANCE TEST SWEEP\n",
            f"Distribution: {self.base_config.distribution}, "
            f"varying: {self.varying}, R = {self.R}, alpha = {self.alpha:g}",
            "",
        ]
        header = f"{self.varying:>10s}" + "".join(
            f" {t.value:>15s}" for t in self.tests
        )
        lines.append(header)
        for point in self.points:
            row = f"{point.value!s:>10s}" + "".join(
                f" {point.rejections[t].proportion:15.4f}" for t in self.tests
            )
            lines.append(row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"SweepSolution(varying={self.varying!r}, "
            f"points={len(self.points)}, R={self.R}, "
            f"backend={self.backend_name!r})"
        )
