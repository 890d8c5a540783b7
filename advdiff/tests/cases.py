"""
Helpers shared by the test modules: winds, trial vectors and the
closed-form discrete upwind solution.
"""

import numpy as np


def zero_wind(x):
    return 0.0


def sign_changing_wind(x):
    """Wind that reverses direction at x = -0.3 (never exactly at a face for the grids used)."""
    return x + 0.3


def reversed_wind(x):
    return -0.7


def random_iterate(rng, mx):
    """Trial vector with boundary values near their Dirichlet data."""
    u = rng.uniform(-0.5, 1.5, mx)
    u[0] = 1.0 + 0.1 * rng.standard_normal()
    u[-1] = 0.1 * rng.standard_normal()
    return u


def discrete_upwind_solution(mx, eps):
    """
    Exact solution of the first-order upwind scheme for a = 1.

    Interior rows reduce to (eps/h) u_{i+1} - (2 eps/h + 1) u_i + (eps/h + 1) u_{i-1} = 0,
    whose roots are 1 and r = 1 + h / eps, so u_i = (r^(mx-1) - r^i) / (r^(mx-1) - 1).
    """
    h = 2.0 / (mx - 1)
    r = 1.0 + h / eps
    i = np.arange(mx)
    # divide through by r^(mx-1) to avoid overflow
    return (1.0 - r ** (i - (mx - 1.0))) / (1.0 - r ** (1.0 - mx))
