"""
Steady 1D Advection-Diffusion Discretization Package
=====================================================

Residual and analytic Jacobian for

    - eps u'' + (a(x) u)' = 0   on [-1, 1],   u(-1) = 1,  u(1) = 0

on a structured grid split over workers.

Features:
- Centered diffusion, upwind advection
- Flux limiters: none (first-order upwind), centered, van Leer
- Independent limiters for residual and Jacobian evaluation
- Analytic Jacobian for the none and centered limiters
- Domain decomposition with halo exchange and collective matrix assembly
- Newton driver with optional finite-difference Jacobian

Example:
    problem = AdvectionDiffusion1D(21, eps=0.01, limiter='vanleer',
                                   jac_limiter='centered', n_workers=3)
    result = NewtonSolver(problem).solve()
    err_inf, err_2 = error_norms(result.u, problem.exact(), problem.hx)
"""

from .errors import (AdvdiffError, ConfigurationError, DegenerateGrid,
                     UnsupportedOperation, UnsupportedLimiter)
from .grid import GridView, partition
from .halo import LocalVector, exchange, scatter, gather
from .limiters import Limiter, centered, vanleer, required_halo_width
from .residual import form_function_local, face_flux, unit_wind
from .jacobian import Contributions, form_jacobian_local, assemble_matrix
from .exact import u_exact, form_u_exact, error_norms
from .problem import AdvectionDiffusion1D
from .newton import NewtonSolver, SolverConfig, SolveResult, fd_jacobian
from .config import RunConfig
from .study import CaseResult, run_case, refinement_study

__all__ = [
    # Errors
    'AdvdiffError',
    'ConfigurationError',
    'DegenerateGrid',
    'UnsupportedOperation',
    'UnsupportedLimiter',

    # Grid and halo
    'GridView',
    'partition',
    'LocalVector',
    'exchange',
    'scatter',
    'gather',

    # Limiters
    'Limiter',
    'centered',
    'vanleer',
    'required_halo_width',

    # Residual and Jacobian
    'form_function_local',
    'face_flux',
    'unit_wind',
    'Contributions',
    'form_jacobian_local',
    'assemble_matrix',

    # Exact solution
    'u_exact',
    'form_u_exact',
    'error_norms',

    # Problem and solver
    'AdvectionDiffusion1D',
    'NewtonSolver',
    'SolverConfig',
    'SolveResult',
    'fd_jacobian',
    'RunConfig',
    'CaseResult',
    'run_case',
    'refinement_study',
]

__version__ = '1.0.0'
