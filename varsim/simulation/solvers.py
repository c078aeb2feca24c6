"""
Simulation solver dispatch.

Public API:
    run_trial(config, rng) -> TrialOutcome
    run_simulation(config, R, seed) -> SimulationSolution
    run_sweep(base_config, varying, grid, R, seed) -> SweepSolution
"""

from __future__ import annotations

import warnings
from typing import Any, Iterable

from varsim.core.exceptions import UndefinedStatisticWarning, ValidationError
from varsim.core.random import SeedLike, as_generator
from varsim.core.validation import check_int_at_least
from varsim.simulation.backends.cpu import (
    CPUSimulationBackend,
    CPUSweepBackend,
    run_trial_impl,
)
from varsim.simulation.design import SimulationConfig, SimulationDesign, SweepDesign
from varsim.simulation.solution import SimulationSolution, SweepSolution
from varsim.vartests._common import TrialOutcome


def _get_backend(backend: str = 'cpu', *, sweep: bool = False, workers: int = 1):
    """
    Select the simulation backend.

    'cpu' runs trials in-process. For sweeps, workers > 1 fans grid
    points out to a process pool.
    """
    if backend in ('cpu', 'auto'):
        if sweep:
            return CPUSweepBackend(workers=workers)
        return CPUSimulationBackend()
    raise ValidationError(f"Unknown backend: {backend!r}. Use 'cpu'.")


def _emit(messages: Iterable[str]) -> None:
    for message in messages:
        warnings.warn(message, UndefinedStatisticWarning, stacklevel=3)


def run_trial(
    config: SimulationConfig,
    rng: SeedLike = None,
) -> TrialOutcome:
    """
    Generate one dataset for `config` and apply its tests.

    Args:
        config: Validated SimulationConfig
        rng: Generator (advanced in place), or a seed for a fresh stream

    Returns:
        TrialOutcome with one VarTestResult per configured test
    """
    if not isinstance(config, SimulationConfig):
        raise ValidationError(
            f"config must be a SimulationConfig, got {type(config).__name__}"
        )
    return run_trial_impl(config, as_generator(rng))


def run_simulation(
    config: SimulationConfig,
    R: int = 500,
    seed: SeedLike = None,
    *,
    backend: str = 'cpu',
) -> SimulationSolution:
    """
    Repeat the trial runner R times on one random stream.

    All R trials always run. Trials with an undefined statistic are kept
    (NaN p-value) and reported once through UndefinedStatisticWarning.

    Args:
        config: Validated SimulationConfig
        R: Number of trials, >= 1. Default 500.
        seed: int, SeedSequence, Generator or None. The same seed and
            config give bit-for-bit identical p-values.
        backend: 'cpu' (default)

    Returns:
        SimulationSolution

    Examples:
        >>> config = SimulationConfig.for_simulation(
        ...     "normal", [(5, 1), (5, 1.2)], n=100,
        ... )
        >>> sim = run_simulation(config, R=500, seed=1)
        >>> sim.rejection_rate("F-test")
    """
    design = SimulationDesign.for_simulation(config, R, seed)
    be = _get_backend(backend)
    result = be.solve(design)
    _emit(result.warnings)
    return SimulationSolution(_result=result, _design=design)


def run_sweep(
    base_config: SimulationConfig,
    varying: str,
    grid: Iterable[Any],
    R: int = 500,
    seed: SeedLike = None,
    *,
    alpha: float | None = None,
    workers: int = 1,
    backend: str = 'cpu',
) -> SweepSolution:
    """
    Vary one parameter over a grid and reduce each point to rejection rates.

    Args:
        base_config: Configuration the grid values are substituted into
        varying: 'ratio' (last group's sd, or mean for exponential, as a
            multiple of the first group's), 'n' (per-group sample size) or
            'mean_diff' (last group's mean minus the first group's)
        grid: Values in traversal order; the order is kept in the result
        R: Trials per grid point. Default 500.
        seed: Root seed; grid point i uses the i-th spawned sub-stream
        alpha: Significance level. Defaults to base_config.alpha.
        workers: Process count for fanning out grid points. Results do
            not depend on it.
        backend: 'cpu' (default)

    Returns:
        SweepSolution

    Raises:
        InvalidParameterError: If any grid value yields an invalid
            configuration (raised before any simulation runs)
    """
    workers = check_int_at_least(workers, 1, "workers")
    design = SweepDesign.for_sweep(base_config, varying, grid, R, seed, alpha=alpha)
    be = _get_backend(backend, sweep=True, workers=workers)
    result = be.solve(design)
    _emit(result.warnings)
    return SweepSolution(_result=result, _design=design)
