"""
CPU backends for the simulation driver and the sweep aggregator.

CPUSimulationBackend: R sequential trials on one random stream.
CPUSweepBackend: one simulation per grid point, each on its own spawned
sub-stream, optionally fanned out to a process pool.
"""

from __future__ import annotations

from collections import Counter
from multiprocessing import get_context
from types import MappingProxyType

import numpy as np

from varsim.core.compute.timing import Timer
from varsim.core.random import as_generator, seed_entropy, spawn_generators
from varsim.core.result import Result
from varsim.distributions.samplers import sample_dataset
from varsim.simulation._common import (
    SimulationParams,
    SweepParams,
    SweepPoint,
    frozen_array,
    summarize_rejections,
)
from varsim.simulation.design import SimulationConfig, SimulationDesign, SweepDesign
from varsim.vartests._common import TrialOutcome
from varsim.vartests.solvers import run_tests


def run_trial_impl(config: SimulationConfig, rng: np.random.Generator) -> TrialOutcome:
    """Draw one dataset for `config` and apply its tests."""
    dataset = sample_dataset(config.distribution, config.groups, config.n, rng)
    return run_tests(dataset.samples, config.tests)


def _undefined_warnings(
    outcomes: tuple[TrialOutcome, ...],
    config: SimulationConfig,
    R: int,
) -> list[str]:
    """One message per test that had undefined trials."""
    messages = []
    for test in config.tests:
        reasons = Counter(
            o[test].reason or "undefined" for o in outcomes if not o[test].defined
        )
        if reasons:
            count = sum(reasons.values())
            detail = ", ".join(f"{r}: {c}" for r, c in sorted(reasons.items()))
            messages.append(
                f"{test.value}: {count} of {R} trials undefined ({detail}); "
                f"excluded from rejection proportions"
            )
    return messages


class CPUSimulationBackend:
    """
    CPU backend for the simulation driver.

    All R trials run on the same generator, which advances from trial to
    trial. No retries and no early stopping.
    """

    @property
    def name(self) -> str:
        return 'cpu_sequential'

    def solve(self, design: SimulationDesign) -> Result[SimulationParams]:
        """Run R trials and return Result[SimulationParams]."""
        timer = Timer()
        timer.start()

        config = design.config
        R = design.R
        rng = as_generator(design.seed)

        with timer.section('trials'):
            outcomes = tuple(run_trial_impl(config, rng) for _ in range(R))

        with timer.section('collection'):
            p_values = frozen_array(
                [[o[t].p_value for t in config.tests] for o in outcomes]
            )
            statistics = frozen_array(
                [[o[t].statistic for t in config.tests] for o in outcomes]
            )
            warnings_list = _undefined_warnings(outcomes, config, R)

        timer.stop()

        params = SimulationParams(
            tests=config.tests,
            outcomes=outcomes,
            p_values=p_values,
            statistics=statistics,
            R=R,
        )

        return Result(
            params=params,
            info={
                'distribution': config.distribution,
                'groups': config.groups,
                'n': config.n,
                'alpha': config.alpha,
                'R': R,
                'seed': seed_entropy(design.seed),
                'config': config,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )


def _simulate_point(
    args: tuple[SimulationConfig, int, np.random.Generator],
) -> Result[SimulationParams]:
    """Pool worker: one grid point on its own sub-stream."""
    config, R, rng = args
    design = SimulationDesign.for_simulation(config, R, rng)
    return CPUSimulationBackend().solve(design)


class CPUSweepBackend:
    """
    CPU backend for the sweep aggregator.

    Grid point i always draws from child i of the seed, so results are
    identical for any number of workers.
    """

    def __init__(self, workers: int = 1):
        self._workers = workers

    @property
    def name(self) -> str:
        return 'cpu_sequential' if self._workers <= 1 else 'cpu_pool'

    def solve(self, design: SweepDesign) -> Result[SweepParams]:
        """Run one simulation per grid point and reduce to SweepPoints."""
        timer = Timer()
        timer.start()

        streams = spawn_generators(design.seed, len(design.grid))
        args = [
            (config, design.R, rng)
            for config, rng in zip(design.configs, streams)
        ]

        with timer.section('simulations'):
            if self._workers > 1 and len(args) > 1:
                ctx = get_context("spawn")
                with ctx.Pool(processes=min(self._workers, len(args))) as pool:
                    results = list(pool.imap(_simulate_point, args, chunksize=1))
                # unpickled arrays come back writeable
                for r in results:
                    r.params.p_values.flags.writeable = False
                    r.params.statistics.flags.writeable = False
            else:
                results = [_simulate_point(a) for a in args]

        tests = design.base_config.tests
        with timer.section('aggregation'):
            points = []
            for value, result in zip(design.grid, results):
                sim = result.params
                points.append(SweepPoint(
                    value=value,
                    rejections=MappingProxyType({
                        t: summarize_rejections(sim.p_values[:, j], design.alpha)
                        for j, t in enumerate(tests)
                    }),
                ))

        warnings_list: list[str] = []
        for value, result in zip(design.grid, results):
            warnings_list.extend(
                f"{design.varying}={value}: {w}" for w in result.warnings
            )

        timer.stop()

        params = SweepParams(
            varying=design.varying,
            tests=tests,
            points=tuple(points),
            simulations=tuple(r.params for r in results),
            alpha=design.alpha,
            R=design.R,
        )

        return Result(
            params=params,
            info={
                'distribution': design.base_config.distribution,
                'varying': design.varying,
                'grid': design.grid,
                'R': design.R,
                'alpha': design.alpha,
                'seed': seed_entropy(design.seed),
                'workers': self._workers,
                'base_config': design.base_config,
                'configs': design.configs,
            },
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
