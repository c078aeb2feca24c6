"""
Design classes for the simulation driver and the sweep aggregator.

SimulationConfig fixes one point of the parameter space (family, group
parameters, sample sizes, tests, alpha). SimulationDesign adds the
repetition count and the random source; SweepDesign varies exactly one
parameter of a base config over a grid. All are immutable and validated
at construction, so a broken configuration fails before any trial runs.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

import numpy as np

from varsim.core.exceptions import GroupCountError, InvalidParameterError, ValidationError
from varsim.core.random import SeedLike
from varsim.core.validation import (
    check_alpha,
    check_int_at_least,
    check_positive,
    check_real,
    check_sample_size,
)
from varsim.distributions._common import (
    GroupParams,
    as_group_params,
    validate_distribution,
)
from varsim.vartests._common import VarTest
from varsim.vartests.solvers import parse_tests


VALID_VARYING = ("ratio", "n", "mean_diff")


@dataclass(frozen=True)
class SimulationConfig:
    """
    One fully specified simulation configuration.

    Attributes:
        distribution: "normal" or "exponential"
        groups: Per-group population parameters, at least two
        n: Per-group sample sizes, one entry per group
        tests: Tests applied in every trial, canonical order
        alpha: Significance level used when reducing to rejection rates

    Do not construct directly; use for_simulation().
    """
    distribution: str
    groups: tuple[GroupParams, ...]
    n: tuple[int, ...]
    tests: tuple[VarTest, ...]
    alpha: float

    @property
    def k(self) -> int:
        return len(self.groups)

    @classmethod
    def for_simulation(
        cls,
        distribution: str,
        groups: Sequence[Any],
        n: int | Sequence[int],
        *,
        tests: Iterable[VarTest | str] | None = None,
        alpha: float = 0.05,
    ) -> SimulationConfig:
        """
        Create a validated configuration.

        Args:
            distribution: "normal" or "exponential"
            groups: Per-group parameters: GroupParams, (mean, sd) tuples
                for the normal family, or (mean,) / bare means for the
                exponential family
            n: Sample size shared by all groups, or one per group
            tests: Tests to apply; None selects all four
            alpha: Significance level in (0, 1). Default 0.05.

        Raises:
            InvalidParameterError: Out-of-range parameter, n < 2, bad alpha
            GroupCountError: Fewer than two groups, or the F-test requested
                with more than two
        """
        distribution = validate_distribution(distribution)
        params = tuple(
            as_group_params(g, f"groups[{i}]").validate(distribution)
            for i, g in enumerate(groups)
        )
        if len(params) < 2:
            raise GroupCountError(
                f"a simulation needs at least 2 groups, got {len(params)}",
                expected=">= 2",
                actual=len(params),
            )

        if np.ndim(n) == 0:
            sizes = (check_sample_size(n),) * len(params)
        else:
            sizes = tuple(n)
            if len(sizes) != len(params):
                raise InvalidParameterError(
                    f"n: got {len(sizes)} group sizes for {len(params)} groups",
                    parameter="n",
                    value=sizes,
                )
            sizes = tuple(check_sample_size(m, f"n[{i}]") for i, m in enumerate(sizes))

        selected = parse_tests(tests)
        if VarTest.F_TEST in selected and len(params) != 2:
            raise GroupCountError(
                f"{VarTest.F_TEST.value} requires exactly 2 groups, got {len(params)}",
                test=VarTest.F_TEST.value,
                expected="exactly 2",
                actual=len(params),
            )

        return cls(
            distribution=distribution,
            groups=params,
            n=sizes,
            tests=selected,
            alpha=check_alpha(alpha),
        )

    def with_value(self, varying: str, value: Any) -> SimulationConfig:
        """
        Copy of this config with one parameter substituted.

        Args:
            varying: 'ratio' sets the last group's scale (sd for normal,
                mean for exponential) to value times the first group's;
                'n' sets every group's sample size; 'mean_diff' sets the
                last group's mean to the first group's mean plus value.
            value: The grid value

        Returns:
            Re-validated SimulationConfig
        """
        groups = list(self.groups)
        n: int | tuple[int, ...] = self.n
        if varying == "ratio":
            ratio = check_positive(value, "ratio")
            base = groups[0].scale(self.distribution)
            groups[-1] = groups[-1].with_scale(self.distribution, base * ratio)
        elif varying == "n":
            n = check_sample_size(value)
        elif varying == "mean_diff":
            diff = check_real(value, "mean_diff")
            groups[-1] = replace(groups[-1], mean=groups[0].mean + diff)
        else:
            raise ValidationError(
                f"varying must be one of {VALID_VARYING}, got {varying!r}"
            )
        return SimulationConfig.for_simulation(
            self.distribution, groups, n, tests=self.tests, alpha=self.alpha,
        )


@dataclass(frozen=True)
class SimulationDesign:
    """
    A configuration plus the repetition count and random source.

    Attributes:
        config: Validated SimulationConfig
        R: Number of trials, >= 1
        seed: int, SeedSequence, Generator, or None. A Generator is used
            as-is and advances.
    """
    config: SimulationConfig
    R: int
    seed: SeedLike

    @classmethod
    def for_simulation(
        cls,
        config: SimulationConfig,
        R: int = 500,
        seed: SeedLike = None,
    ) -> SimulationDesign:
        if not isinstance(config, SimulationConfig):
            raise ValidationError(
                f"config must be a SimulationConfig, got {type(config).__name__}"
            )
        return cls(config=config, R=check_int_at_least(R, 1, "R"), seed=seed)


@dataclass(frozen=True)
class SweepDesign:
    """
    Frozen design for a one-parameter sweep.

    Attributes:
        base_config: Configuration the grid values are substituted into
        varying: 'ratio', 'n' or 'mean_diff'
        grid: Grid values in traversal order
        configs: One validated SimulationConfig per grid value
        R: Trials per grid point
        alpha: Significance level for rejection proportions
        seed: Root of the per-grid-point random sub-streams
    """
    base_config: SimulationConfig
    varying: str
    grid: tuple[Any, ...]
    configs: tuple[SimulationConfig, ...]
    R: int
    alpha: float
    seed: SeedLike

    @classmethod
    def for_sweep(
        cls,
        base_config: SimulationConfig,
        varying: str,
        grid: Iterable[Any],
        R: int = 500,
        seed: SeedLike = None,
        *,
        alpha: float | None = None,
    ) -> SweepDesign:
        """
        Create a sweep design; every grid point is validated up front.

        Raises:
            ValidationError: Unknown `varying` or empty grid
            InvalidParameterError: A grid value gives an invalid config
        """
        if not isinstance(base_config, SimulationConfig):
            raise ValidationError(
                f"base_config must be a SimulationConfig, "
                f"got {type(base_config).__name__}"
            )
        if varying not in VALID_VARYING:
            raise ValidationError(
                f"varying must be one of {VALID_VARYING}, got {varying!r}"
            )
        grid = tuple(np.asarray(grid).ravel().tolist())
        if len(grid) == 0:
            raise ValidationError("grid must contain at least one value")

        alpha = base_config.alpha if alpha is None else check_alpha(alpha)
        configs = tuple(
            replace(base_config.with_value(varying, v), alpha=alpha) for v in grid
        )

        return cls(
            base_config=base_config,
            varying=varying,
            grid=grid,
            configs=configs,
            R=check_int_at_least(R, 1, "R"),
            alpha=alpha,
            seed=seed,
        )
