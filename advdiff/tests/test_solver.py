"""
Pytest tests for the Newton driver and end-to-end accuracy.

Tests verify:
1. Solver convergence with the analytic Jacobian
2. Agreement with the exact discrete upwind solution
3. Accuracy against the exact solution on a resolved grid
4. First-order convergence under grid refinement
5. Finite-difference Jacobian mode (no analytic Jacobian calls)
6. Non-convergence is reported, not raised
7. The solution does not depend on the number of workers
"""

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from advdiff.src import (
    AdvectionDiffusion1D, NewtonSolver, SolverConfig, RunConfig,
    run_case, refinement_study, error_norms, u_exact, ConfigurationError
)
from advdiff.src.study import observed_orders
from advdiff.tests.cases import discrete_upwind_solution


@pytest.fixture
def solver_config():
    """Solver configuration for tests."""
    return SolverConfig(max_iter=30, rtol=1e-10)


class TestConvergence:

    def test_linear_problem_converges_in_one_step(self, solver_config):
        problem = AdvectionDiffusion1D(21, eps=0.01, limiter='none')
        result = NewtonSolver(problem, solver_config).solve()
        assert result.converged
        assert result.iterations == 1
        assert result.reason.startswith('CONVERGED')
        assert len(result.residual_history) == 2

    def test_matches_discrete_upwind_solution(self, solver_config):
        """N=21, eps=0.01, a=1: the iterate is the closed-form upwind solution."""
        problem = AdvectionDiffusion1D(21, eps=0.01, limiter='none')
        result = NewtonSolver(problem, solver_config).solve()
        np.testing.assert_allclose(result.u, discrete_upwind_solution(21, 0.01), atol=1e-10)

        # the layer is under-resolved at this spacing (h / eps = 10): largest
        # error sits next to the outflow boundary and equals 1/11 - exp(-10)
        err_inf, _ = error_norms(result.u, problem.exact(), problem.hx)
        assert err_inf == pytest.approx(1.0 / 11.0 - np.exp(-10.0), abs=1e-8)

    @pytest.mark.parametrize("limiter", ['none', 'centered'])
    def test_centered_jacobian_converges(self, solver_config, limiter):
        problem = AdvectionDiffusion1D(31, eps=0.1, limiter=limiter)
        result = NewtonSolver(problem, solver_config).solve()
        assert result.converged
        assert np.linalg.norm(problem.residual(result.u)) < 1e-8

    def test_initial_guess_already_solution(self, solver_config):
        problem = AdvectionDiffusion1D(11, eps=0.2)
        u0 = discrete_upwind_solution(11, 0.2)
        result = NewtonSolver(problem, SolverConfig(atol=1e-10)).solve(u0)
        assert result.converged
        assert result.iterations == 0
        assert result.reason == 'CONVERGED_FNORM_ABS'


class TestAccuracy:

    def test_resolved_layer_error(self):
        """Upwind error is below 0.05 once the grid resolves the layer."""
        case = run_case(RunConfig(mx=201, eps=0.1, limiter='none'))
        assert case.solve.converged
        assert case.err_inf < 0.05

    def test_exact_solution_values(self):
        assert u_exact(-1.0, 0.01) == pytest.approx(1.0)
        assert u_exact(1.0, 0.01) == pytest.approx(0.0)
        assert u_exact(0.0, 0.01) == pytest.approx(1.0)

    def test_refinement_is_first_order(self):
        results = refinement_study(RunConfig(eps=0.1, limiter='none'), [21, 41, 81])
        errors = [r.err_2 for r in results]
        assert errors[0] > errors[1] > errors[2], f"errors not decreasing: {errors}"
        orders = observed_orders(results)
        assert np.all(orders > 0.6) and np.all(orders < 1.3), f"observed orders {orders}"


class TestJacobianModes:

    def test_fd_jacobian_bypasses_analytic_evaluator(self):
        """With vanleer in both slots the analytic Jacobian would fail; FD mode never calls it."""
        problem = AdvectionDiffusion1D(21, eps=0.1, limiter='vanleer', jac_limiter='vanleer')
        result = NewtonSolver(problem, SolverConfig(fd_jacobian=True, max_iter=30)).solve()
        assert np.all(np.isfinite(result.u))
        assert result.residual_norm < result.residual_history[0]

    def test_fd_jacobian_linear_problem(self):
        problem = AdvectionDiffusion1D(15, eps=0.1, limiter='centered', jac_limiter=None)
        result = NewtonSolver(problem, SolverConfig(fd_jacobian=True, rtol=1e-8)).solve()
        assert result.converged
        assert np.linalg.norm(problem.residual(result.u)) < 1e-6

    def test_mixed_limiters_report_non_convergence(self):
        """vanleer residual with a centered Jacobian: one step cannot reach rtol=1e-14."""
        problem = AdvectionDiffusion1D(21, eps=0.01, limiter='vanleer', jac_limiter='centered')
        config = SolverConfig(max_iter=1, rtol=1e-14, stol=0.0)
        result = NewtonSolver(problem, config).solve()
        assert not result.converged
        assert result.reason == 'DIVERGED_MAX_IT'
        assert result.iterations == 1

    def test_invalid_solver_config(self):
        with pytest.raises(ConfigurationError):
            SolverConfig(max_iter=0)
        with pytest.raises(ConfigurationError):
            SolverConfig(rtol=-1.0)


class TestDecomposedSolve:

    @pytest.mark.parametrize("limiter", ['none', 'centered'])
    def test_solution_independent_of_workers(self, solver_config, limiter):
        serial = NewtonSolver(AdvectionDiffusion1D(25, eps=0.05, limiter=limiter),
                              solver_config).solve()
        split = NewtonSolver(AdvectionDiffusion1D(25, eps=0.05, limiter=limiter, n_workers=4),
                             solver_config).solve()
        np.testing.assert_allclose(split.u, serial.u, atol=1e-12)

    def test_case_result_summary(self):
        case = run_case(RunConfig(mx=21, eps=0.01, limiter='none', n_workers=3))
        lines = case.summary().splitlines()
        assert lines[0] == "done on 21 point grid (eps = 0.01, limiter = none, jac_limiter = none)"
        assert lines[1].startswith("numerical error:  |u-uexact|_inf = ")
