"""
Compare the three flux limiters on the boundary-layer problem and plot
them against the exact solution.

This script demonstrates:
1. First-order upwind (monotone but smeared layer)
2. Centered limiter (oscillates when h / eps > 2)
3. Van Leer limiter, solved with a finite-difference Jacobian, and with a
   centered Jacobian as a cheaper approximate linearization

Run from the project root:
    python advdiff/scripts/run_limiter_comparison.py [mx] [eps]
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import numpy as np
import matplotlib.pyplot as plt
from advdiff.src import RunConfig, SolverConfig, run_case, u_exact


def main():
    mx = int(sys.argv[1]) if len(sys.argv) > 1 else 21
    eps = float(sys.argv[2]) if len(sys.argv) > 2 else 0.01

    configs = {
        'upwind': RunConfig(mx=mx, eps=eps, limiter='none'),
        'centered': RunConfig(mx=mx, eps=eps, limiter='centered'),
        'van Leer (FD Jacobian)': RunConfig(mx=mx, eps=eps, limiter='vanleer',
                                            solver=SolverConfig(fd_jacobian=True)),
        'van Leer (centered Jacobian)': RunConfig(mx=mx, eps=eps, limiter='vanleer',
                                                  jac_limiter='centered',
                                                  solver=SolverConfig(max_iter=200)),
    }

    fig, ax = plt.subplots(figsize=(9, 6))
    xf = np.linspace(-1.0, 1.0, 1000)
    ax.plot(xf, u_exact(xf, eps), 'k-', linewidth=2, label='Exact')

    print(f"{'scheme':30s} {'iters':>5s} {'reason':>26s} {'err_inf':>11s} {'err_2':>11s}")
    for (name, config), marker in zip(configs.items(), ['o', 's', '^', 'v']):
        case = run_case(config)
        print(f"{name:30s} {case.solve.iterations:5d} {case.solve.reason:>26s} "
              f"{case.err_inf:11.4e} {case.err_2:11.4e}")
        ax.plot(case.x, case.u, marker=marker, linestyle='--', markersize=5, label=name)

    ax.set_xlabel('x')
    ax.set_ylabel('u')
    ax.set_title(f'Limiter comparison: mx = {mx}, eps = {eps:g}')
    ax.grid(True, alpha=0.3)
    ax.legend()

    plt.tight_layout()
    plt.savefig('limiter_comparison.png', dpi=150, bbox_inches='tight')
    print("Saved plot to limiter_comparison.png")
    plt.show()


if __name__ == "__main__":
    main()
