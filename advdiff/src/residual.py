"""
Residual of the steady advection-diffusion equation

    - eps u'' + (a(x) u)' = 0   on [-1, 1],   u(-1) = 1,  u(1) = 0

Residuals are scaled by hx:
    F_i = (- eps u'' + (a u)') * hx     at interior points
    F_i = scdiag * (u_i - bc_i)         at boundary points

with scdiag = 2 eps / hx + 1 so boundary rows have the same size as
interior ones.
"""

import numpy as np
from typing import Callable, Optional

from .errors import ConfigurationError
from .grid import GridView
from .halo import LocalVector
from .limiters import Limiter, required_halo_width

U_LEFT = 1.0
U_RIGHT = 0.0


def unit_wind(x: float) -> float:
    """Constant wind a(x) = 1."""
    return 1.0


def boundary_scale(eps: float, hx: float) -> float:
    """Diagonal scale applied to the Dirichlet rows."""
    return (2.0 * eps) / hx + 1.0


# Values around face x_{i+1/2}. Boundary cells are replaced by their
# Dirichlet values, so no index outside the interior is ever read.

def upwind_value(info: GridView, u: LocalVector, i: int, a: float) -> float:
    if a >= 0.0:
        return U_LEFT if i == 0 else u[i]
    return U_RIGHT if i + 1 == info.mx - 1 else u[i + 1]


def downwind_value(info: GridView, u: LocalVector, i: int, a: float) -> float:
    if a >= 0.0:
        return u[i + 1] if i + 1 < info.mx - 1 else U_RIGHT
    return U_LEFT if i == 0 else u[i]


def far_upwind_value(info: GridView, u: LocalVector, i: int, a: float) -> float:
    """One cell beyond the upwind cell; two cells from the face."""
    if a >= 0.0:
        return u[i - 1] if i - 1 > 0 else U_LEFT
    return u[i + 2] if i + 2 < info.mx - 1 else U_RIGHT


def face_flux(info: GridView, u: LocalVector, i: int, a: float,
              limiter: Limiter) -> float:
    """
    Advective flux at face x_{i+1/2} for wind speed a.

    First-order upwind flux plus, when a limiter is set and the
    downwind and upwind values differ, the limited correction. Without
    a limiter only the upwind value is read, so a halo of width 1 is
    enough; the far-upwind value is read only when the correction is
    applied.
    """
    u_up = upwind_value(info, u, i, a)
    flux = a * u_up
    psi = limiter.function
    if psi is not None:
        u_dn = downwind_value(info, u, i, a)
        if u_dn != u_up:
            u_far = far_upwind_value(info, u, i, a)
            theta = (u_up - u_far) / (u_dn - u_up)
            flux += a * psi(theta) * (u_dn - u_up)
    return flux


def form_function_local(info: GridView, u: LocalVector, eps: float,
                        limiter: Limiter = Limiter.NONE,
                        wind: Optional[Callable[[float], float]] = None) -> np.ndarray:
    """
    Residual over one worker's owned range.

    Args:
        info: Worker's grid view
        u: Ghosted solution for this worker
        eps: Diffusion coefficient (> 0)
        limiter: Residual-side flux limiter
        wind: Wind speed a(x); defaults to a = 1

    Returns:
        F: Residual at owned points (info.xm,)

    Raises:
        ConfigurationError: If the view's halo is too narrow for the limiter
    """
    if info.halo < required_halo_width(limiter):
        raise ConfigurationError(
            f"{limiter} limiter needs a halo of width {required_halo_width(limiter)}, "
            f"worker {info.rank} has {info.halo}")
    wind = unit_wind if wind is None else wind
    mx, xs, xe = info.mx, info.xs, info.xe
    hx = info.hx
    halfx = hx / 2.0
    scdiag = boundary_scale(eps, hx)

    F = np.zeros(info.xm)

    # non-advective part at each owned cell center
    for i in range(xs, xe):
        if i == 0:
            F[i - xs] = scdiag * (u[i] - U_LEFT)
        elif i == mx - 1:
            F[i - xs] = scdiag * (u[i] - U_RIGHT)
        else:
            uW = U_LEFT if i == 1 else u[i - 1]
            uE = U_RIGHT if i == mx - 2 else u[i + 1]
            F[i - xs] = - eps * (uW - 2.0 * u[i] + uE) / hx

    # flux through the E face of each owned cell; start one cell early
    # to pick up the W face of the first owned cell
    for i in range(xs - 1, xe):
        if i < 0 or i == mx - 1:
            continue
        a = wind(info.x(i) + halfx)
        flux = face_flux(info, u, i, a, limiter)
        if i > 0 and info.owns(i):
            F[i - xs] += flux        # out of i through E
        if i + 1 < mx - 1 and info.owns(i + 1):
            F[i + 1 - xs] -= flux    # into i+1 through W

    return F
