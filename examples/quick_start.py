"""Quick start example: build funs, find roots and extrema, and check algebra."""

import math

import numpy as np

from chebfunpy import Fun


def long_fun(x, _):
    """An oscillatory function with a steep tanh layer, vectorized."""
    return np.sin(5.0 * np.pi * (x - 0.327)) * np.tanh(10.0 * (x - 0.5) * (x + 0.5)) + x


def short_fun(x, _):
    """cos(pi*x), vectorized."""
    return np.cos(np.pi * x)


def short_fun_scalar(x, _):
    """cos(pi*x), one point at a time."""
    return math.cos(math.pi * x)


# Build the long fun adaptively
f1 = Fun.build_vec(long_fun, -1.0, 1.0, verbose=True)
print(f1)

# Roots
roots = f1.roots()
print(f"\nGot {len(roots)} real roots (degree {f1.degree}).")
for k, r in enumerate(roots):
    print(f"r[{k}] = {r: .6e}, f(r[{k}]) = {f1(r): .2e}")

# Extrema and norms
y, x = f1.max()
print(f"\nmax(f1) = {y:.16e} at x = {x:.16e}")
y, x = f1.min()
print(f"min(f1) = {y:.16e} at x = {x:.16e}")
print(f"norm_inf(f1) = {f1.norm_inf():.16e}")
print(f"norm2(f1)    = {f1.norm2():.16e}")
f1.clean()

# f - f is the zero fun
f2 = Fun.build_vec(short_fun, -1.0, 1.0)
f3 = Fun.combine(1.0, f2, -1.0, f2)
print(f"\nThis should be zero: {f3.norm_inf():.2e}")

# A copy is equal to its source
f5 = f2.copy()
Fun.combine(1.0, f2, -1.0, f5, out=f5)
print(f"Copy error = {f5.norm_inf():.2e}")

# Restricting to [0, 1] agrees with building there directly
f6 = f2.restrict(0.0, 1.0)
f4 = Fun.build_vec(short_fun, 0.0, 1.0)
Fun.combine(1.0, f6, -1.0, f4, out=f4)
print(f"\nRestrict error (inf) = {f4.norm_inf():.2e}")
print(f"Restrict error (2)   = {f4.norm2():.2e}")

# A fixed-degree build of the same degree agrees with the restriction
f7 = Fun.build_fixed(short_fun_scalar, 0.0, 1.0, f6.degree)
Fun.combine(1.0, f7, -1.0, f6, out=f7)
print(f"\nNonadapt error (inf) = {f7.norm_inf():.2e}")
print(f"Nonadapt error (2)   = {f7.norm2():.2e}")
