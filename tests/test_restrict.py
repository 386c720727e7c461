"""Tests for restriction of a fun to a subinterval."""

from __future__ import annotations

import numpy as np
import pytest

from chebfunpy import ChebOpts, DomainMismatchError, Fun
from conftest import cos_pi_vec, long_vec


class TestRestrict:
    """Tests for Fun.restrict()."""

    def test_full_domain_reproduces(self, fun_cos):
        h = fun_cos.restrict(-1.0, 1.0)
        assert h.degree == fun_cos.degree
        assert np.array_equal(h.values, fun_cos.values)
        assert np.max(np.abs(h.coefficients - fun_cos.coefficients)) < 1e-15

    def test_matches_adaptive_build(self, fun_cos, fun_cos_01):
        """Restricting cos(pi*x) from [-1, 1] to [0, 1] matches a direct build."""
        restricted = fun_cos.restrict(0.0, 1.0)
        assert restricted.domain == (0.0, 1.0)
        err = Fun.combine(1.0, restricted, -1.0, fun_cos_01)
        assert err.norm_inf() < 1e-13, f"Restrict error (inf) {err.norm_inf():.2e}"
        assert err.norm2() < 1e-13, f"Restrict error (2) {err.norm2():.2e}"

    def test_keeps_degree(self, fun_long):
        h = fun_long.restrict(-0.3, 0.4)
        assert h.degree == fun_long.degree

    def test_accuracy_on_subinterval(self, fun_long):
        h = fun_long.restrict(-0.3, 0.4)
        x = np.linspace(-0.3, 0.4, 201)
        assert np.max(np.abs(h(x) - long_vec(x, None))) < 1e-11

    def test_transitive(self, fun_cos):
        two_step = fun_cos.restrict(-1.0, 0.5).restrict(0.0, 0.5)
        direct = fun_cos.restrict(0.0, 0.5)
        assert two_step.degree == direct.degree
        assert np.max(np.abs(two_step.values - direct.values)) < 1e-13

    def test_adjacent_pieces_agree_at_join(self, fun_long):
        left = fun_long.restrict(-1.0, 0.2)
        right = fun_long.restrict(0.2, 1.0)
        assert abs(left(0.2) - right(0.2)) < 1e-13
        assert abs(left.values[-1] - right.values[0]) < 1e-13

    def test_resampling_rebuilds_adaptively(self, fun_cos):
        h = fun_cos.restrict(0.0, 0.25, opts=ChebOpts(resampling=True))
        assert h.resolved
        assert h.degree < fun_cos.degree
        x = np.linspace(0.0, 0.25, 33)
        assert np.max(np.abs(h(x) - cos_pi_vec(x, None))) < 1e-13

    def test_original_unchanged(self, fun_cos):
        before = fun_cos.values.copy()
        fun_cos.restrict(0.0, 0.5)
        assert np.array_equal(fun_cos.values, before)

    @pytest.mark.parametrize("c, d", [(0.5, 0.5), (0.5, 0.2), (-2.0, 0.0), (0.0, 1.5)])
    def test_invalid_interval_raises(self, fun_cos, c, d):
        with pytest.raises(DomainMismatchError):
            fun_cos.restrict(c, d)
