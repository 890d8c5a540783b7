"""
Exact solution of the constant-wind problem and error norms.

For a(x) = 1 the boundary-layer solution is

    u(x) = (1 - exp((x - 1) / eps)) / (1 - exp(-2 / eps))
"""

import numpy as np
from typing import Tuple

from .grid import GridView


def u_exact(x, eps: float):
    """Exact solution at x (scalar or array)."""
    return (1.0 - np.exp((x - 1.0) / eps)) / (1.0 - np.exp(- 2.0 / eps))


def form_u_exact(info: GridView, eps: float) -> np.ndarray:
    """Exact solution sampled at the owned points of one worker."""
    return u_exact(info.coordinates(), eps)


def error_norms(u: np.ndarray, uex: np.ndarray, hx: float) -> Tuple[float, float]:
    """
    Infinity norm and mesh-scaled 2-norm of u - uex.

    The 2-norm is multiplied by sqrt(hx) so it approximates the L2 norm
    of the error function and is comparable across resolutions.

    Returns:
        (err_inf, err_2)
    """
    e = np.asarray(u) - np.asarray(uex)
    errinf = float(np.max(np.abs(e)))
    err2 = float(np.linalg.norm(e) * np.sqrt(hx))
    return errinf, err2
