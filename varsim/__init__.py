"""
varsim: Monte Carlo comparison of tests for equality of variance.

Estimates the Type-I error rate and power of the F-test, Bartlett's test,
Levene's test and the Brown-Forsythe test by repeated sampling from
controlled populations, and sweeps one design parameter at a time.

Submodules:
    distributions: Seedable group samplers (Normal, Exponential)
    vartests: The four variance-equality tests
    simulation: Trial runner, simulation driver and sweep aggregator
"""

__version__ = "0.1.0"

from varsim import distributions
from varsim import vartests
from varsim import simulation
from varsim.simulation import SimulationConfig, run_simulation, run_sweep, run_trial
from varsim.vartests import VarTest

__all__ = [
    "__version__",
    "distributions",
    "vartests",
    "simulation",
    "SimulationConfig",
    "VarTest",
    "run_simulation",
    "run_sweep",
    "run_trial",
]
