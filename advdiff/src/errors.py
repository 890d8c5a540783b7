"""
Exceptions raised by the advection-diffusion discretization.
"""


class AdvdiffError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(AdvdiffError, ValueError):
    """Invalid problem or solver settings (e.g. eps <= 0, unknown limiter)."""


class DegenerateGrid(AdvdiffError, ValueError):
    """Grid has fewer than two points."""


class UnsupportedOperation(AdvdiffError, NotImplementedError):
    """Requested operation has no implementation."""


class UnsupportedLimiter(UnsupportedOperation):
    """Jacobian requested for a limiter whose derivative is not implemented."""
