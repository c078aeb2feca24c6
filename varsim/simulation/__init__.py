"""
Monte Carlo simulation of variance-equality tests.

Usage:
    from varsim.simulation import SimulationConfig, run_simulation, run_sweep

    config = SimulationConfig.for_simulation("normal", [(5, 1), (5, 1)], n=100)

    # Type-I error at one configuration
    sim = run_simulation(config, R=500, seed=42)
    sim.rejection_rate("Levene")

    # Power as the sd ratio moves away from 1
    sweep = run_sweep(config, "ratio", [1, 1.1, 1.2, 1.5], R=500, seed=42)
    sweep.rejection("F-test")
"""

from varsim.simulation._common import RejectionSummary, SweepPoint, summarize_rejections
from varsim.simulation.design import (
    VALID_VARYING,
    SimulationConfig,
    SimulationDesign,
    SweepDesign,
)
from varsim.simulation.solution import SimulationSolution, SweepSolution
from varsim.simulation.solvers import run_simulation, run_sweep, run_trial

__all__ = [
    "VALID_VARYING",
    "RejectionSummary",
    "SimulationConfig",
    "SimulationDesign",
    "SimulationSolution",
    "SweepDesign",
    "SweepPoint",
    "SweepSolution",
    "run_simulation",
    "run_sweep",
    "run_trial",
    "summarize_rejections",
]
