"""
Flux limiters for the high-order advective flux correction.

A limiter psi(theta) blends the first-order upwind flux toward a
higher-order one:

    flux = a * u_up + a * psi(theta) * (u_dn - u_up)

where theta = (u_up - u_far) / (u_dn - u_up) is the ratio of the
upwind-side gradient to the local gradient at the face.
"""

from enum import Enum
from typing import Callable, Optional

from .errors import ConfigurationError


def centered(theta: float) -> float:
    """Always blend 50/50 toward the centered flux."""
    return 0.5


def vanleer(theta: float) -> float:
    """
    Van Leer limiter.

    Zero for theta <= 0, tends to 1 as theta -> infinity.
    """
    abstheta = abs(theta)
    return 0.5 * (theta + abstheta) / (1.0 + abstheta)


class Limiter(Enum):
    """Closed set of flux-limiter choices."""
    NONE = 'none'
    CENTERED = 'centered'
    VANLEER = 'vanleer'

    @classmethod
    def parse(cls, name) -> 'Limiter':
        """Look up a limiter by option name (case-insensitive)."""
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            options = ', '.join(lim.value for lim in cls)
            raise ConfigurationError(f"Unknown limiter: {name!r}. Options: {options}") from None

    @property
    def function(self) -> Optional[Callable[[float], float]]:
        """psi(theta), or None when no correction is applied."""
        return _LIMITER_FUNCTIONS[self]

    @property
    def differentiable(self) -> bool:
        """Whether the analytic Jacobian supports this limiter."""
        return self is not Limiter.VANLEER

    def __str__(self):
        return self.value


_LIMITER_FUNCTIONS = {
    Limiter.NONE: None,
    Limiter.CENTERED: centered,
    Limiter.VANLEER: vanleer,
}


def required_halo_width(limiter: Limiter) -> int:
    """
    Ghost width the residual needs for a given limiter.

    The limiter reads one value further upstream than the upwind cell, so
    the face just outside the owned range reaches two cells past it.
    """
    return 1 if limiter is Limiter.NONE else 2
