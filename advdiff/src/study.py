"""
Run a configured case, compare with the exact solution, and study refinement.
"""

import logging
import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass, replace
from typing import List, Sequence

from .config import RunConfig
from .exact import error_norms, u_exact
from .newton import NewtonSolver, SolveResult
from .problem import AdvectionDiffusion1D

logger = logging.getLogger(__name__)


@dataclass
class CaseResult:
    """Solution of one case and its error against the exact solution."""
    config: RunConfig
    x: np.ndarray
    u: np.ndarray
    u_exact: np.ndarray
    err_inf: float
    err_2: float
    solve: SolveResult

    def summary(self) -> str:
        jac = self.config.effective_jac_limiter
        return (f"done on {self.config.mx} point grid (eps = {self.config.eps:g}, "
                f"limiter = {self.config.limiter}, "
                f"jac_limiter = {'' if jac is None else jac.value})\n"
                f"numerical error:  |u-uexact|_inf = {self.err_inf:.4e},  "
                f"|u-uexact|_2 = {self.err_2:.4e}")


def build_problem(config: RunConfig) -> AdvectionDiffusion1D:
    return AdvectionDiffusion1D(config.mx, eps=config.eps, limiter=config.limiter,
                                jac_limiter=config.effective_jac_limiter,
                                n_workers=config.n_workers)


def run_case(config: RunConfig) -> CaseResult:
    """Solve one case from a zero initial iterate and measure the error."""
    problem = build_problem(config)
    result = NewtonSolver(problem, config.solver).solve()
    if not result.converged:
        logger.warning("mx=%d: no convergence (%s after %d iterations)",
                       config.mx, result.reason, result.iterations)
    uex = problem.exact()
    err_inf, err_2 = error_norms(result.u, uex, problem.hx)
    return CaseResult(config, problem.coordinates(), result.u, uex, err_inf, err_2, result)


def refinement_study(config: RunConfig, resolutions: Sequence[int]) -> List[CaseResult]:
    """Run the same case on each grid size in `resolutions`."""
    results = []
    for mx in resolutions:
        case = run_case(replace(config, mx=mx))
        logger.info("mx=%4d  err_inf=%.4e  err_2=%.4e", mx, case.err_inf, case.err_2)
        results.append(case)
    return results


def observed_orders(results: Sequence[CaseResult]) -> np.ndarray:
    """Convergence rates log(e_k / e_{k+1}) / log(h_k / h_{k+1}) of the 2-norm error."""
    h = np.array([2.0 / (r.config.mx - 1) for r in results])
    e = np.array([r.err_2 for r in results])
    return np.log(e[:-1] / e[1:]) / np.log(h[:-1] / h[1:])


def plot_case(case: CaseResult, filename: str = None):
    """Plot the numerical and exact solutions."""
    plt.figure(figsize=(8, 5))
    xf = np.linspace(-1.0, 1.0, 1000)
    plt.plot(xf, u_exact(xf, case.config.eps), 'r--', linewidth=2, label='Exact')
    plt.plot(case.x, case.u, 'bo-', markersize=4, linewidth=1, label='Numerical')
    plt.xlabel('x')
    plt.ylabel('u')
    plt.title(f'mx = {case.config.mx}, eps = {case.config.eps:g}, limiter = {case.config.limiter}')
    plt.grid(True, alpha=0.3)
    plt.legend()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        print(f"Saved plot to {filename}")
    else:
        plt.show()


def plot_refinement(results: Sequence[CaseResult], filename: str = None):
    """Log-log plot of both error norms against grid spacing."""
    h = np.array([2.0 / (r.config.mx - 1) for r in results])
    plt.figure(figsize=(8, 5))
    plt.loglog(h, [r.err_inf for r in results], 'bo-', label='|u-uexact|_inf')
    plt.loglog(h, [r.err_2 for r in results], 'rs-', label='|u-uexact|_2')
    plt.loglog(h, h * results[0].err_2 / h[0], 'k:', label='O(h)')
    plt.xlabel('h')
    plt.ylabel('Error')
    plt.title('Grid Refinement')
    plt.grid(True, which='both', alpha=0.3)
    plt.legend()

    if filename:
        plt.savefig(filename, dpi=150, bbox_inches='tight')
        print(f"Saved plot to {filename}")
    else:
        plt.show()
