"""Tests for the Chebyshev grid, value/coefficient transforms and chopping."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.polynomial.chebyshev import chebval

from chebfunpy._transform import (
    chebpts,
    chop_coeffs,
    clenshaw,
    coeffs_to_values,
    tail_resolved,
    values_to_coeffs,
)


class TestChebpts:
    """Tests for chebpts()."""

    def test_ascending_with_exact_endpoints(self):
        x = chebpts(9, (2.0, 5.0))
        assert len(x) == 10
        assert x[0] == 2.0 and x[-1] == 5.0
        assert np.all(np.diff(x) > 0)

    def test_reference_interval(self):
        n = 8
        x = chebpts(n)
        expected = -np.cos(np.pi * np.arange(n + 1) / n)
        assert np.max(np.abs(x - expected)) < 1e-15

    def test_degree_zero_is_midpoint(self):
        x = chebpts(0, (1.0, 3.0))
        assert x.shape == (1,)
        assert x[0] == 2.0

    def test_negative_degree_raises(self):
        with pytest.raises(ValueError):
            chebpts(-1)

    def test_doubled_grid_contains_old_grid(self):
        """Even-index points of the 2N grid are the N grid."""
        old = chebpts(16, (0.0, 1.0))
        new = chebpts(32, (0.0, 1.0))
        assert np.max(np.abs(new[0::2] - old)) < 1e-15


class TestTransform:
    """Tests for values_to_coeffs() and coeffs_to_values()."""

    @pytest.mark.parametrize("n", [1, 2, 7, 16, 33, 100])
    def test_round_trip(self, n):
        rng = np.random.default_rng(n)
        values = rng.standard_normal(n + 1)
        back = coeffs_to_values(values_to_coeffs(values))
        assert np.max(np.abs(back - values)) < 1e-13

    def test_single_polynomial_recovered(self):
        """Sampling T_5 on the degree-8 grid gives the unit coefficient vector."""
        x = chebpts(8)
        values = np.cos(5 * np.arccos(x))
        coeffs = values_to_coeffs(values)
        expected = np.zeros(9)
        expected[5] = 1.0
        assert np.max(np.abs(coeffs - expected)) < 1e-14

    def test_coefficients_match_numpy_chebval(self):
        coeffs = np.array([0.3, -1.2, 0.5, 0.25, -0.1])
        values = coeffs_to_values(coeffs)
        expected = chebval(chebpts(4), coeffs)
        assert np.max(np.abs(values - expected)) < 1e-14

    def test_degree_zero_is_identity(self):
        values = np.array([4.2])
        assert np.array_equal(values_to_coeffs(values), values)
        assert np.array_equal(coeffs_to_values(values), values)

    def test_transform_returns_new_array(self):
        values = np.array([7.0])
        coeffs = values_to_coeffs(values)
        coeffs[0] = 0.0
        assert values[0] == 7.0


class TestClenshaw:
    """Tests for clenshaw()."""

    def test_matches_chebval(self):
        coeffs = np.array([1.0, 0.5, -0.25, 0.125, 2.0])
        t = np.linspace(-1, 1, 37)
        assert np.max(np.abs(clenshaw(t, coeffs) - chebval(t, coeffs))) < 1e-14

    def test_constant(self):
        assert float(clenshaw(np.array(0.3), np.array([2.5]))) == 2.5

    def test_linear(self):
        t = np.array([-1.0, 0.0, 0.5])
        assert np.max(np.abs(clenshaw(t, np.array([1.0, 2.0])) - (1.0 + 2.0 * t))) < 1e-15


class TestChop:
    """Tests for chop_coeffs() and tail_resolved()."""

    def test_chop_drops_negligible_tail(self):
        coeffs = np.array([1.0, 0.5, 1e-20, 0.0])
        assert np.array_equal(chop_coeffs(coeffs, 1.0, 2.0**-52), [1.0, 0.5])

    def test_chop_keeps_interior_zeros(self):
        coeffs = np.array([1.0, 0.0, 0.5, 1e-20])
        assert np.array_equal(chop_coeffs(coeffs, 1.0, 2.0**-52), [1.0, 0.0, 0.5])

    def test_chop_all_negligible_gives_zero(self):
        coeffs = np.array([1e-30, -1e-30])
        chopped = chop_coeffs(coeffs, 1.0, 2.0**-52)
        assert np.array_equal(chopped, [0.0])

    def test_chop_is_relative_to_scale(self):
        coeffs = np.array([1e-10, 1e-12, 1e-30])
        assert len(chop_coeffs(coeffs, 1e-10, 2.0**-52)) == 2

    def test_tail_resolved_geometric_decay(self):
        coeffs = 2.0 ** -np.arange(65)
        assert tail_resolved(coeffs, 1.0, 2.0**-52)

    def test_tail_unresolved_flat(self):
        assert not tail_resolved(np.ones(17), 1.0, 2.0**-52)

    def test_zero_scale_is_resolved(self):
        assert tail_resolved(np.zeros(17), 0.0, 2.0**-52)

    def test_single_zero_odd_coefficient_is_not_enough(self):
        """Even function: c_N-1 vanishes, but c_N does not."""
        coeffs = np.zeros(17)
        coeffs[0] = 1.0
        coeffs[16] = 1e-3
        assert not tail_resolved(coeffs, 1.0, 2.0**-52)
