"""
Command-line driver: solve  - eps u'' + (a(x) u)' = 0  on [-1, 1] with
u(-1) = 1, u(1) = 0, a(x) = 1, and report the error against the exact
solution.

    advdiff --mx 21 --eps 0.01 --limiter vanleer --jac-limiter centered
    advdiff --refine 21 41 81 --plot refinement.png
"""

import argparse
import dataclasses
import logging
import sys

from .config import RunConfig
from .errors import AdvdiffError
from .limiters import Limiter
from .study import observed_orders, plot_case, plot_refinement, refinement_study, run_case

logger = logging.getLogger('advdiff')


def build_parser() -> argparse.ArgumentParser:
    limiters = [lim.value for lim in Limiter]
    parser = argparse.ArgumentParser(
        "advdiff", description="Solve a 1D advection-diffusion problem with flux limiters.")
    parser.add_argument("-c", "--config", help="JSON run configuration; options below override it")
    parser.add_argument("-m", "--mx", type=int, help="number of grid points (default 3)")
    parser.add_argument("--eps", type=float, help="positive diffusion coefficient (default 0.01)")
    parser.add_argument("--limiter", choices=limiters, help="flux-limiter type (default none)")
    parser.add_argument("--jac-limiter", choices=limiters,
                        help="flux-limiter type used in Jacobian evaluation (default: same as --limiter)")
    parser.add_argument("-w", "--workers", type=int, help="number of workers the grid is split over")
    parser.add_argument("--fd", action="store_true",
                        help="finite-difference Jacobian instead of the analytic one")
    parser.add_argument("--max-it", type=int, help="maximum Newton iterations")
    parser.add_argument("--rtol", type=float, help="relative residual tolerance")
    parser.add_argument("--monitor", action="store_true",
                        help="print the residual norm at every Newton iteration")
    parser.add_argument("--refine", type=int, nargs="+", metavar="MX",
                        help="run a refinement study over these grid sizes")
    parser.add_argument("--plot", metavar="FILE", help="save a plot of the result to FILE")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable verbose output")
    parser.add_argument("-vv", "--very-verbose", action="store_true", help="enable very verbose output")
    return parser


def setup_logging(args):
    if args.very_verbose:
        logger.setLevel(logging.DEBUG)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.DEBUG)
    elif args.verbose:
        logger.setLevel(logging.INFO)
        ch = logging.StreamHandler(stream=sys.stdout)
        ch.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)
        ch = logging.StreamHandler(stream=sys.stderr)
        ch.setLevel(logging.WARNING)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ch.setFormatter(formatter)
    logger.handlers = [ch]


def config_from_args(args) -> RunConfig:
    """Start from --config (or defaults) and apply command-line overrides."""
    config = RunConfig.from_json(args.config) if args.config else RunConfig()

    overrides = {}
    if args.mx is not None:
        overrides['mx'] = args.mx
    if args.eps is not None:
        overrides['eps'] = args.eps
    if args.limiter is not None:
        overrides['limiter'] = args.limiter
    if args.jac_limiter is not None:
        overrides['jac_limiter'] = args.jac_limiter
    if args.workers is not None:
        overrides['n_workers'] = args.workers

    solver_overrides = {}
    if args.fd:
        solver_overrides['fd_jacobian'] = True
    if args.max_it is not None:
        solver_overrides['max_iter'] = args.max_it
    if args.rtol is not None:
        solver_overrides['rtol'] = args.rtol
    if args.monitor:
        solver_overrides['monitor'] = True
    if solver_overrides:
        overrides['solver'] = dataclasses.replace(config.solver, **solver_overrides)

    return dataclasses.replace(config, **overrides)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args)

    try:
        config = config_from_args(args)
        if args.refine:
            results = refinement_study(config, args.refine)
            for case in results:
                print(case.summary())
            if len(results) > 1:
                rates = ', '.join(f"{r:.2f}" for r in observed_orders(results))
                print(f"observed orders (2-norm): {rates}")
            if args.plot:
                plot_refinement(results, args.plot)
        else:
            case = run_case(config)
            print(case.summary())
            if args.plot:
                plot_case(case, args.plot)
    except AdvdiffError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
