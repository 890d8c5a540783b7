"""
Analytic Jacobian of the advection-diffusion residual.

Each worker produces a list of (row, col, value) contributions for its
owned rows; the collective assemble step sums every worker's
contributions into a new sparse matrix. Columns belonging to the
Dirichlet points are fixed data, not unknowns, so interior rows never
reference them.

Only the 'none' and 'centered' limiters are supported; the derivative of
the van Leer flux is not implemented.
"""

import logging
import numpy as np
import scipy.sparse as sp
from typing import Callable, Iterable, Optional

from .errors import UnsupportedLimiter
from .grid import GridView
from .halo import LocalVector
from .limiters import Limiter
from .residual import boundary_scale, unit_wind

logger = logging.getLogger(__name__)


class Contributions:
    """Accumulator of (row, col, value) triples; duplicates are summed on assembly."""

    def __init__(self):
        self.rows = []
        self.cols = []
        self.vals = []

    def add(self, row: int, col: int, value: float):
        self.rows.append(row)
        self.cols.append(col)
        self.vals.append(value)

    def __len__(self):
        return len(self.vals)

    def to_coo(self, mx: int) -> sp.coo_matrix:
        return sp.coo_matrix(
            (np.asarray(self.vals, dtype=float),
             (np.asarray(self.rows, dtype=int), np.asarray(self.cols, dtype=int))),
            shape=(mx, mx))


def check_jacobian_limiter(jac_limiter: Optional[Limiter]):
    """Raise UnsupportedLimiter if the analytic Jacobian cannot use this limiter."""
    if jac_limiter is not None and not jac_limiter.differentiable:
        raise UnsupportedLimiter(f"Jacobian for {jac_limiter} limiter is not implemented")


def form_jacobian_local(info: GridView, u: LocalVector, eps: float,
                        jac_limiter: Limiter = Limiter.NONE,
                        wind: Optional[Callable[[float], float]] = None) -> Contributions:
    """
    Jacobian contributions for one worker's owned rows.

    The supported limiters give a solution-independent Jacobian, but u is
    still taken so the signature matches the residual evaluator.

    Args:
        info: Worker's grid view
        u: Ghosted solution for this worker
        eps: Diffusion coefficient (> 0)
        jac_limiter: Jacobian-side flux limiter
        wind: Wind speed a(x); defaults to a = 1

    Returns:
        Contributions for rows [info.xs, info.xe)

    Raises:
        UnsupportedLimiter: If jac_limiter is van Leer
    """
    check_jacobian_limiter(jac_limiter)
    wind = unit_wind if wind is None else wind
    mx = info.mx
    hx = info.hx
    halfx = hx / 2.0
    scdiag = boundary_scale(eps, hx)
    J = Contributions()

    def add(i, col, value):
        # interior rows only couple to interior columns
        if 0 < col < mx - 1:
            J.add(i, col, value)

    for i in range(info.xs, info.xe):
        if info.is_boundary(i):
            J.add(i, i, scdiag)
            continue

        # diffusive part
        add(i, i, (2.0 * eps) / hx)
        add(i, i - 1, - eps / hx)
        add(i, i + 1, - eps / hx)

        # advective part: first-order upwind flux through each face
        x = info.x(i)
        aE = wind(x + halfx)
        aW = wind(x - halfx)
        if aE >= 0.0:
            add(i, i, aE)
        else:
            add(i, i + 1, aE)
        if aW >= 0.0:
            add(i, i - 1, - aW)
        else:
            add(i, i, - aW)

        if jac_limiter is Limiter.CENTERED:
            # psi = 1/2 moves each face flux halfway to the downwind value
            if aE >= 0.0:
                add(i, i + 1, aE / 2.0)
                add(i, i, - aE / 2.0)
            else:
                add(i, i + 1, - aE / 2.0)
                add(i, i, aE / 2.0)
            if aW >= 0.0:
                add(i, i, - aW / 2.0)
                add(i, i - 1, aW / 2.0)
            else:
                add(i, i, aW / 2.0)
                add(i, i - 1, - aW / 2.0)

    return J


def assemble_matrix(contributions: Iterable[Contributions], mx: int) -> sp.csr_matrix:
    """
    Collective finalize: sum every worker's contributions into a new matrix.

    Must receive the contributions of *all* workers, since rows owned by
    one worker are only complete once every worker has added its part.

    Args:
        contributions: One Contributions per worker
        mx: Global number of grid points

    Returns:
        Jacobian (mx, mx) in CSR format
    """
    total = Contributions()
    for part in contributions:
        total.rows.extend(part.rows)
        total.cols.extend(part.cols)
        total.vals.extend(part.vals)
    n_entries = len(total)

    # conversion to CSR sums duplicate (row, col) entries
    J = total.to_coo(mx).tocsr()
    J.sum_duplicates()
    logger.debug("assembled %dx%d Jacobian from %d contributions (%d stored)",
                 mx, mx, n_entries, J.nnz)
    return J
