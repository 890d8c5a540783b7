"""
Run configuration: problem settings plus solver settings, loadable from JSON.
"""

import dataclasses
import enum
import json
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .errors import ConfigurationError
from .limiters import Limiter
from .newton import SolverConfig


class AdvancedJSONEncoder(json.JSONEncoder):
    """JSON encoder that understands dataclasses, enums and numpy scalars/arrays."""

    def default(self, o):
        if dataclasses.is_dataclass(o):
            return dataclasses.asdict(o)
        if isinstance(o, enum.Enum):
            return o.value
        if isinstance(o, np.generic):
            return o.item()
        if isinstance(o, np.ndarray):
            return o.tolist()
        return super().default(o)


def dataclass_from_dict(cls, dct):
    if dataclasses.is_dataclass(cls):
        fieldtypes = {f.name: f.type for f in dataclasses.fields(cls)}
        unknown = set(dct) - set(fieldtypes)
        if unknown:
            raise ConfigurationError(f"unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}")
        return cls(**{name: dataclass_from_dict(fieldtypes[name], dct[name]) for name in dct})
    else:
        return dct


@dataclasses.dataclass
class RunConfig:
    """
    Settings for one solve.

    jac_limiter None means "same as limiter" unless solver.fd_jacobian is
    set, in which case the analytic Jacobian is bypassed entirely.
    """
    mx: int = 3
    eps: float = 0.01
    limiter: str = 'none'
    jac_limiter: Optional[str] = None
    n_workers: int = 1
    solver: SolverConfig = dataclasses.field(default_factory=SolverConfig)

    def __post_init__(self):
        if isinstance(self.solver, dict):
            self.solver = SolverConfig(**self.solver)
        if not self.eps > 0.0:
            raise ConfigurationError(f"eps={self.eps:.3f} invalid ... eps > 0 required")
        # validate names eagerly, keep the option strings
        self.limiter = Limiter.parse(self.limiter).value
        if self.jac_limiter is not None:
            self.jac_limiter = Limiter.parse(self.jac_limiter).value
        if self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {self.n_workers}")

    @property
    def effective_jac_limiter(self) -> Optional[Limiter]:
        """Limiter used by the analytic Jacobian, or None when it is bypassed."""
        if self.solver.fd_jacobian:
            return None
        if self.jac_limiter is None:
            return Limiter.parse(self.limiter)
        return Limiter.parse(self.jac_limiter)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> 'RunConfig':
        with open(path) as f:
            try:
                dct = json.load(f)
            except json.JSONDecodeError as exc:
                raise ConfigurationError(f"cannot parse {path}: {exc}") from exc
        return dataclass_from_dict(cls, dct)

    def to_json(self, path: Union[str, Path]):
        with open(path, 'w') as f:
            json.dump(self, f, cls=AdvancedJSONEncoder, indent=2)
