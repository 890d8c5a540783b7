"""
advdiff - 1D Advection-Diffusion Residual/Jacobian Package
===========================================================

Re-exports all public components from advdiff.src
"""

from advdiff.src import (
    # Errors
    AdvdiffError,
    ConfigurationError,
    DegenerateGrid,
    UnsupportedOperation,
    UnsupportedLimiter,
    # Grid
    GridView,
    partition,
    # Limiters
    Limiter,
    # Problem
    AdvectionDiffusion1D,
    # Solver
    NewtonSolver,
    SolverConfig,
    RunConfig,
    run_case,
)

__all__ = [
    'AdvdiffError',
    'ConfigurationError',
    'DegenerateGrid',
    'UnsupportedOperation',
    'UnsupportedLimiter',
    'GridView',
    'partition',
    'Limiter',
    'AdvectionDiffusion1D',
    'NewtonSolver',
    'SolverConfig',
    'RunConfig',
    'run_case',
]
