"""
Newton iteration driving the residual/Jacobian evaluators.

Plain (undamped) Newton with a direct sparse linear solve. The Jacobian
comes either from the problem's analytic evaluator or from a
finite-difference approximation of the residual, in which case the
analytic evaluator is never called.
"""

import logging
import numpy as np
import scipy.sparse as sp
import scipy.sparse.linalg as spla
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the Newton solver."""
    max_iter: int = 50
    rtol: float = 1e-8      # Residual norm reduction relative to the initial residual
    atol: float = 1e-50     # Absolute residual norm
    stol: float = 1e-8      # Step norm relative to solution norm
    fd_jacobian: bool = False  # Difference the residual instead of the analytic Jacobian
    fd_step: float = 1e-7
    monitor: bool = False      # Print the residual norm at every iteration

    def __post_init__(self):
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {self.max_iter}")
        for name in ('rtol', 'atol', 'stol', 'fd_step'):
            if getattr(self, name) < 0.0:
                raise ConfigurationError(f"{name} must be non-negative")


@dataclass
class SolveResult:
    """Outcome of a nonlinear solve; non-convergence is reported, not raised."""
    u: np.ndarray
    converged: bool
    iterations: int
    reason: str
    residual_norm: float
    residual_history: List[float] = field(default_factory=list)


def fd_jacobian(residual, u: np.ndarray, F0: Optional[np.ndarray] = None,
                step: float = 1e-7) -> sp.csr_matrix:
    """
    Forward-difference Jacobian, one residual evaluation per column.

    Args:
        residual: Function u -> F
        u: Point to linearize about
        F0: residual(u), if already known
        step: Relative perturbation size

    Returns:
        Jacobian in CSR format; only nonzero differences are stored
    """
    u = np.asarray(u, dtype=float)
    n = u.size
    if F0 is None:
        F0 = residual(u)
    rows, cols, vals = [], [], []
    for j in range(n):
        du = step * max(abs(u[j]), 1.0)
        up = u.copy()
        up[j] += du
        column = (residual(up) - F0) / du
        nz = np.flatnonzero(column)
        rows.append(nz)
        cols.append(np.full(nz.size, j))
        vals.append(column[nz])
    return sp.csr_matrix(
        (np.concatenate(vals), (np.concatenate(rows), np.concatenate(cols))),
        shape=(n, n))


class NewtonSolver:
    """
    Newton solver for F(u) = 0.

    The problem must provide residual(u), jacobian(u) and
    initial_guess(); see AdvectionDiffusion1D.
    """

    def __init__(self, problem, config: SolverConfig = None):
        self.problem = problem
        self.config = config if config is not None else SolverConfig()

    def _jacobian(self, u: np.ndarray, F: np.ndarray) -> sp.csr_matrix:
        if self.config.fd_jacobian:
            return fd_jacobian(self.problem.residual, u, F, self.config.fd_step)
        return self.problem.jacobian(u)

    def _monitor(self, it: int, fnorm: float):
        if self.config.monitor:
            print(f"{it:3d} SNES Function norm {fnorm:.12e}")
        else:
            logger.info("%3d SNES Function norm %.12e", it, fnorm)

    def solve(self, u0: Optional[np.ndarray] = None) -> SolveResult:
        """
        Iterate from u0 (default: the problem's initial guess).

        Returns:
            SolveResult with the final iterate and convergence reason
        """
        cfg = self.config
        u = np.array(self.problem.initial_guess() if u0 is None else u0, dtype=float)

        F = self.problem.residual(u)
        fnorm0 = fnorm = float(np.linalg.norm(F))
        history = [fnorm]
        self._monitor(0, fnorm)

        if fnorm <= cfg.atol:
            return SolveResult(u, True, 0, 'CONVERGED_FNORM_ABS', fnorm, history)

        reason = 'DIVERGED_MAX_IT'
        converged = False
        it = 0
        for it in range(1, cfg.max_iter + 1):
            J = self._jacobian(u, F)
            try:
                du = spla.spsolve(J.tocsc(), -F)
            except RuntimeError as exc:
                logger.warning("linear solve failed at iteration %d: %s", it, exc)
                reason = 'DIVERGED_LINEAR_SOLVE'
                break
            if not np.all(np.isfinite(du)):
                logger.warning("linear solve produced non-finite step at iteration %d", it)
                reason = 'DIVERGED_LINEAR_SOLVE'
                break

            u = u + du
            F = self.problem.residual(u)
            fnorm = float(np.linalg.norm(F))
            history.append(fnorm)
            self._monitor(it, fnorm)

            if fnorm <= cfg.atol:
                reason, converged = 'CONVERGED_FNORM_ABS', True
                break
            if fnorm <= cfg.rtol * fnorm0:
                reason, converged = 'CONVERGED_FNORM_RELATIVE', True
                break
            if np.linalg.norm(du) <= cfg.stol * np.linalg.norm(u):
                reason, converged = 'CONVERGED_SNORM_RELATIVE', True
                break

        if converged:
            logger.info("Nonlinear solve converged due to %s iterations %d", reason, it)
        else:
            logger.warning("Nonlinear solve did not converge due to %s iterations %d", reason, it)
        return SolveResult(u, converged, it, reason, fnorm, history)
