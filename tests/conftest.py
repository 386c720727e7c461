"""Shared test fixtures for chebfunpy tests."""

import math

import numpy as np
import pytest

from chebfunpy import Fun


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def cos_pi_vec(x, _):
    """cos(pi*x), vectorized"""
    return np.cos(np.pi * x)


def cos_pi(x, _):
    """cos(pi*x), scalar"""
    return math.cos(math.pi * x)


def long_vec(x, _):
    """sin(5*pi*(x - 0.327)) * tanh(10*(x - 0.5)*(x + 0.5)) + x"""
    return np.sin(5.0 * np.pi * (x - 0.327)) * np.tanh(10.0 * (x - 0.5) * (x + 0.5)) + x


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fun_cos():
    """Adaptive cos(pi*x) on [-1, 1]."""
    return Fun.build_vec(cos_pi_vec, -1.0, 1.0)


@pytest.fixture
def fun_cos_01():
    """Adaptive cos(pi*x) on [0, 1]."""
    return Fun.build_vec(cos_pi_vec, 0.0, 1.0)


@pytest.fixture(scope="module")
def fun_long():
    """Adaptive oscillatory function on [-1, 1] with a kink-like tanh layer."""
    return Fun.build_vec(long_vec, -1.0, 1.0)


@pytest.fixture
def fun_empty():
    """An empty (unbuilt) fun."""
    return Fun()
