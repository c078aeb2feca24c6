"""
Tests for the population samplers.

Validates:
    - Sizes, dtypes and moments of Normal and Exponential draws
    - Exponential is parameterised by its mean (rate = 1/mean)
    - Invalid parameters are rejected before sampling, never clamped
    - Reproducibility from an explicit Generator
"""

import numpy as np
import pytest

from varsim.core.exceptions import InvalidParameterError
from varsim.distributions import GroupParams, sample_dataset, sample_group


class TestSampleGroup:

    def test_normal_shape_and_moments(self):
        rng = np.random.default_rng(42)
        x = sample_group("normal", GroupParams(mean=5.0, sd=2.0), 20000, rng)
        assert x.shape == (20000,)
        assert x.dtype == np.float64
        assert np.mean(x) == pytest.approx(5.0, abs=0.1)
        assert np.std(x, ddof=1) == pytest.approx(2.0, rel=0.05)

    def test_exponential_mean_and_variance(self):
        rng = np.random.default_rng(42)
        x = sample_group("exponential", GroupParams(mean=3.0), 50000, rng)
        assert np.all(x >= 0)
        assert np.mean(x) == pytest.approx(3.0, rel=0.05)
        assert np.var(x, ddof=1) == pytest.approx(9.0, rel=0.1)

    def test_consumes_generator(self):
        rng = np.random.default_rng(1)
        a = sample_group("normal", GroupParams(0.0, 1.0), 5, rng)
        b = sample_group("normal", GroupParams(0.0, 1.0), 5, rng)
        assert not np.array_equal(a, b)

    def test_same_seed_same_draw(self):
        a = sample_group("normal", GroupParams(0.0, 1.0), 5, np.random.default_rng(9))
        b = sample_group("normal", GroupParams(0.0, 1.0), 5, np.random.default_rng(9))
        np.testing.assert_array_equal(a, b)


class TestInvalidParameters:

    @pytest.mark.parametrize("sd", [0.0, -1.0, float("nan"), float("inf")])
    def test_normal_bad_sd(self, sd):
        with pytest.raises(InvalidParameterError):
            sample_group("normal", GroupParams(5.0, sd), 10, np.random.default_rng(0))

    def test_normal_missing_sd(self):
        with pytest.raises(InvalidParameterError, match="sd is required"):
            sample_group("normal", GroupParams(5.0), 10, np.random.default_rng(0))

    @pytest.mark.parametrize("mean", [0.0, -2.0])
    def test_exponential_bad_mean(self, mean):
        with pytest.raises(InvalidParameterError, match="mean"):
            sample_group("exponential", GroupParams(mean), 10, np.random.default_rng(0))

    def test_exponential_rejects_sd(self):
        with pytest.raises(InvalidParameterError, match="mean only"):
            sample_group("exponential", GroupParams(1.0, 1.0), 10, np.random.default_rng(0))

    @pytest.mark.parametrize("n", [0, 1, 2.5])
    def test_bad_n(self, n):
        with pytest.raises(InvalidParameterError):
            sample_group("normal", GroupParams(0.0, 1.0), n, np.random.default_rng(0))

    def test_unknown_family(self):
        with pytest.raises(InvalidParameterError, match="distribution"):
            sample_group("cauchy", GroupParams(0.0, 1.0), 10, np.random.default_rng(0))

    def test_rejected_before_sampling(self):
        """A rejected call leaves the generator untouched."""
        rng = np.random.default_rng(3)
        with pytest.raises(InvalidParameterError):
            sample_group("normal", GroupParams(0.0, -1.0), 10, rng)
        expected = np.random.default_rng(3).random()
        assert rng.random() == expected


class TestGroupParams:

    def test_scale_and_variance(self):
        g = GroupParams(mean=5.0, sd=1.5)
        assert g.scale("normal") == 1.5
        assert g.variance("normal") == pytest.approx(2.25)
        e = GroupParams(mean=2.0)
        assert e.scale("exponential") == 2.0
        assert e.variance("exponential") == pytest.approx(4.0)

    def test_with_scale(self):
        assert GroupParams(5.0, 1.0).with_scale("normal", 1.2) == GroupParams(5.0, 1.2)
        assert GroupParams(1.0).with_scale("exponential", 3.0) == GroupParams(3.0)


class TestSampleDataset:

    def test_two_groups_common_n(self):
        ds = sample_dataset(
            "normal", (GroupParams(5, 1), GroupParams(5, 1.2)), 100,
            np.random.default_rng(0),
        )
        assert ds.k == 2
        assert ds.sizes == (100, 100)
        assert ds.distribution == "normal"

    def test_unequal_sizes(self):
        ds = sample_dataset(
            "exponential", (GroupParams(1), GroupParams(1), GroupParams(2)),
            (10, 20, 30), np.random.default_rng(0),
        )
        assert ds.sizes == (10, 20, 30)

    def test_group_order_matches_stream(self):
        """Groups are drawn in order from the same stream."""
        groups = (GroupParams(0, 1), GroupParams(0, 1))
        ds = sample_dataset("normal", groups, 4, np.random.default_rng(11))
        flat = np.random.default_rng(11).normal(0, 1, 8)
        np.testing.assert_array_equal(np.concatenate(ds.samples), flat)

    def test_size_count_mismatch(self):
        with pytest.raises(InvalidParameterError, match="group sizes"):
            sample_dataset(
                "normal", (GroupParams(0, 1), GroupParams(0, 1)), (10,),
                np.random.default_rng(0),
            )

    def test_single_group_rejected(self):
        with pytest.raises(InvalidParameterError, match="at least 2 groups"):
            sample_dataset("normal", (GroupParams(0, 1),), 10, np.random.default_rng(0))

    def test_whole_number_float_n(self):
        ds = sample_dataset(
            "normal", (GroupParams(0, 1), GroupParams(0, 1)), 10.0,
            np.random.default_rng(0),
        )
        assert ds.sizes == (10, 10)

    def test_tuple_groups(self):
        a = sample_dataset("normal", [(5, 1), (5, 2)], 6, np.random.default_rng(4))
        b = sample_dataset(
            "normal", (GroupParams(5, 1), GroupParams(5, 2)), 6,
            np.random.default_rng(4),
        )
        for x, y in zip(a.samples, b.samples):
            np.testing.assert_array_equal(x, y)

    def test_uninterpretable_group_named(self):
        with pytest.raises(InvalidParameterError, match=r"groups\[1\]"):
            sample_dataset(
                "normal", [(0, 1), object()], 10, np.random.default_rng(0),
            )


class TestParameterForms:
    """sample_group takes (mean, sd) / (mean,) tuples as well as GroupParams."""

    def test_normal_tuple(self):
        a = sample_group("normal", (5.0, 1.0), 10, np.random.default_rng(2))
        b = sample_group("normal", GroupParams(5.0, 1.0), 10, np.random.default_rng(2))
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("params", [(2.0,), 2.0, {"mean": 2.0}])
    def test_exponential_mean_only(self, params):
        a = sample_group("exponential", params, 10, np.random.default_rng(2))
        b = sample_group("exponential", GroupParams(2.0), 10, np.random.default_rng(2))
        np.testing.assert_array_equal(a, b)

    def test_mapping(self):
        a = sample_group("normal", {"mean": 0.0, "sd": 3.0}, 10, np.random.default_rng(2))
        b = sample_group("normal", GroupParams(0.0, 3.0), 10, np.random.default_rng(2))
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("params", [
        {"mu": 0.0, "sd": 1.0},
        (0.0, 1.0, 2.0),
        (),
        None,
    ])
    def test_malformed_params(self, params):
        with pytest.raises(InvalidParameterError, match="params"):
            sample_group("normal", params, 10, np.random.default_rng(0))

    def test_tuple_out_of_range(self):
        with pytest.raises(InvalidParameterError, match="sd"):
            sample_group("normal", (5.0, -1.0), 10, np.random.default_rng(0))

    def test_exponential_tuple_with_sd(self):
        with pytest.raises(InvalidParameterError, match="mean only"):
            sample_group("exponential", (1.0, 1.0), 10, np.random.default_rng(0))
