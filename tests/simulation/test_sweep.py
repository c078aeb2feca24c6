"""
Tests for the sweep aggregator.

Validates:
    - Grid order preserved, one SweepPoint per value
    - Fail-fast validation of every grid value before any simulation
    - alpha override and rejection-proportion bookkeeping
    - Results independent of the worker count
"""

import math
import warnings

import numpy as np
import pytest

from varsim.core.exceptions import (
    InvalidParameterError,
    UndefinedStatisticWarning,
    ValidationError,
)
from varsim.simulation import SimulationConfig, SweepPoint, run_sweep
from varsim.vartests import ALL_TESTS, VarTest


@pytest.fixture
def base():
    return SimulationConfig.for_simulation("normal", [(5, 1), (5, 1)], n=20)


class TestRunSweep:

    def test_grid_order_preserved(self, base):
        sweep = run_sweep(base, "ratio", [1.5, 1.0, 1.2], R=20, seed=0)
        np.testing.assert_array_equal(sweep.values, [1.5, 1.0, 1.2])
        assert len(sweep.points) == 3
        assert all(isinstance(p, SweepPoint) for p in sweep.points)

    def test_rejection_arrays(self, base):
        sweep = run_sweep(base, "n", [10, 20], R=30, seed=1)
        for test in ALL_TESTS:
            r = sweep.rejection(test)
            assert r.shape == (2,)
            assert np.all((r >= 0.0) & (r <= 1.0))
            assert sweep.mc_se(test).shape == (2,)
            np.testing.assert_array_equal(sweep.n_undefined(test), [0, 0])

    def test_matches_raw_p_values(self, base):
        sweep = run_sweep(base, "ratio", [1.0, 2.0], R=40, seed=2)
        for i, point in enumerate(sweep.points):
            p = sweep.p_values(i)[VarTest.F_TEST]
            assert p.shape == (40,)
            expected = np.count_nonzero(p < 0.05) / 40
            assert point.rejection("F-test") == pytest.approx(expected)

    def test_alpha_defaults_to_config(self, base):
        sweep = run_sweep(base, "ratio", [1.0], R=10, seed=0)
        assert sweep.alpha == 0.05

    def test_alpha_override(self, base):
        loose = run_sweep(base, "ratio", [1.3], R=60, seed=3, alpha=0.5)
        strict = run_sweep(base, "ratio", [1.3], R=60, seed=3, alpha=0.01)
        assert loose.alpha == 0.5
        for test in ALL_TESTS:
            assert loose.rejection(test)[0] >= strict.rejection(test)[0]

    def test_same_seed_identical(self, base):
        a = run_sweep(base, "mean_diff", [0.0, 1.0], R=25, seed=9)
        b = run_sweep(base, "mean_diff", [0.0, 1.0], R=25, seed=9)
        for test in ALL_TESTS:
            np.testing.assert_array_equal(a.rejection(test), b.rejection(test))

    def test_reused_seed_sequence_identical(self, base):
        ss = np.random.SeedSequence(123)
        a = run_sweep(base, "ratio", [1.0, 1.5], R=20, seed=ss)
        b = run_sweep(base, "ratio", [1.0, 1.5], R=20, seed=ss)
        for i in range(2):
            for test in ALL_TESTS:
                np.testing.assert_array_equal(a.p_values(i)[test], b.p_values(i)[test])

    def test_seed_sequence_matches_int_seed(self, base):
        a = run_sweep(base, "ratio", [1.0, 1.5], R=20, seed=123)
        b = run_sweep(base, "ratio", [1.0, 1.5], R=20, seed=np.random.SeedSequence(123))
        for test in ALL_TESTS:
            np.testing.assert_array_equal(a.rejection(test), b.rejection(test))

    def test_points_are_read_only(self, base):
        sweep = run_sweep(base, "ratio", [1.0], R=10, seed=0)
        point = sweep.points[0]
        with pytest.raises(TypeError):
            point.rejections[VarTest.F_TEST] = None
        with pytest.raises(ValueError):
            sweep.p_values(0)[VarTest.F_TEST][0] = 0.0

    def test_points_use_independent_streams(self, base):
        """Repeated grid values draw from different sub-streams."""
        sweep = run_sweep(base, "ratio", [1.0, 1.0], R=25, seed=4)
        p0 = sweep.p_values(0)[VarTest.BARTLETT]
        p1 = sweep.p_values(1)[VarTest.BARTLETT]
        assert not np.array_equal(p0, p1)

    def test_workers_do_not_change_results(self, base):
        grid = [1.0, 1.2, 1.5]
        serial = run_sweep(base, "ratio", grid, R=30, seed=17)
        pooled = run_sweep(base, "ratio", grid, R=30, seed=17, workers=2)
        assert serial.backend_name == 'cpu_sequential'
        assert pooled.backend_name == 'cpu_pool'
        for i in range(len(grid)):
            for test in ALL_TESTS:
                np.testing.assert_array_equal(
                    serial.p_values(i)[test], pooled.p_values(i)[test],
                )
        with pytest.raises(ValueError):
            pooled.p_values(0)[VarTest.F_TEST][0] = 0.0

    def test_to_records(self, base):
        sweep = run_sweep(base, "ratio", [1.0, 2.0], R=10, seed=5)
        records = sweep.to_records()
        assert len(records) == 2 * len(ALL_TESTS)
        first = records[0]
        assert first['ratio'] == 1.0
        assert first['test'] == "F-test"
        assert first['n_defined'] + first['n_undefined'] == 10
        assert set(first) == {
            'ratio', 'test', 'rejection', 'n_rejected',
            'n_defined', 'n_undefined', 'mc_se',
        }

    def test_summary_and_repr(self, base):
        sweep = run_sweep(base, "ratio", [1.0, 1.5], R=10, seed=0)
        text = sweep.summary()
        assert "VARIANCE TEST SWEEP" in text
        assert "Brown-Forsythe" in text
        assert "points=2" in repr(sweep)

    def test_metadata(self, base):
        sweep = run_sweep(base, "ratio", [1.0], R=10, seed=7)
        assert sweep.info['seed'] == 7
        assert sweep.info['grid'] == (1.0,)
        assert 'simulations' in sweep.timing
        assert sweep.base_config is base


class TestSweepValidation:

    def test_bad_grid_value_fails_before_running(self, base, monkeypatch):
        calls = []
        import varsim.simulation.backends.cpu as cpu
        monkeypatch.setattr(
            cpu, "_simulate_point", lambda args: calls.append(args),
        )
        with pytest.raises(InvalidParameterError, match="ratio"):
            run_sweep(base, "ratio", [1.0, 2.0, -1.0], R=10, seed=0)
        assert calls == []

    def test_n_below_two(self, base):
        with pytest.raises(InvalidParameterError):
            run_sweep(base, "n", [10, 1], R=10, seed=0)

    def test_exponential_negative_mean(self):
        config = SimulationConfig.for_simulation(
            "exponential", [(1,), (1,)], n=20,
        )
        with pytest.raises(InvalidParameterError, match="mean"):
            run_sweep(config, "mean_diff", [0.0, -2.0], R=10, seed=0)

    def test_unknown_varying(self, base):
        with pytest.raises(ValidationError, match="varying"):
            run_sweep(base, "variance", [1.0], R=10, seed=0)

    def test_bad_alpha(self, base):
        with pytest.raises(InvalidParameterError, match="alpha"):
            run_sweep(base, "ratio", [1.0], R=10, seed=0, alpha=1.5)

    def test_bad_workers(self, base):
        with pytest.raises(InvalidParameterError, match="workers"):
            run_sweep(base, "ratio", [1.0], R=10, seed=0, workers=0)


class TestSweepUndefined:

    def test_warning_prefixed_with_grid_value(self):
        config = SimulationConfig.for_simulation(
            "normal", [(0, 1), (0, 1)], n=10,
        )
        with pytest.warns(UndefinedStatisticWarning, match="n=2"):
            sweep = run_sweep(config, "n", [2, 10], R=15, seed=0)
        bf = sweep.n_undefined("Brown-Forsythe")
        assert bf[0] == 15
        assert bf[1] == 0
        rates = sweep.rejection("Brown-Forsythe")
        assert math.isnan(rates[0])
        assert not math.isnan(rates[1])
        assert any(w.startswith("n=2: ") for w in sweep.warnings)

    def test_silent_when_all_defined(self, base):
        with warnings.catch_warnings():
            warnings.simplefilter("error", UndefinedStatisticWarning)
            sweep = run_sweep(base, "ratio", [1.0, 1.5], R=10, seed=0)
        assert sweep.warnings == ()
