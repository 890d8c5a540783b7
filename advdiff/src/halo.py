"""
Halo exchange between a global vector and per-worker ghosted views.
"""

import numpy as np
from typing import List

from .grid import GridView


class LocalVector:
    """
    Read-only ghosted copy of a global vector for one worker.

    Indexed by *global* index over [info.gxs, info.gxe). The underlying
    array is flagged non-writeable so evaluators cannot modify ghosts.
    """

    def __init__(self, info: GridView, values: np.ndarray):
        expected = info.gxe - info.gxs
        if values.shape != (expected,):
            raise ValueError(f"expected {expected} ghosted values, got shape {values.shape}")
        self.info = info
        self.values = values
        self.values.flags.writeable = False

    def __getitem__(self, i: int) -> float:
        if not self.info.gxs <= i < self.info.gxe:
            raise IndexError(f"index {i} outside ghosted range "
                             f"[{self.info.gxs}, {self.info.gxe}) of worker {self.info.rank}")
        return self.values[i - self.info.gxs]

    def owned(self) -> np.ndarray:
        """Values over the owned range (view, read-only)."""
        offset = self.info.xs - self.info.gxs
        return self.values[offset:offset + self.info.xm]


def exchange(u: np.ndarray, info: GridView) -> LocalVector:
    """
    Refresh one worker's ghosted view from the global vector.

    Args:
        u: Global solution (mx,)
        info: Worker's grid view

    Returns:
        Fresh LocalVector holding owned and ghost values
    """
    u = np.asarray(u, dtype=float)
    if u.shape != (info.mx,):
        raise ValueError(f"global vector has shape {u.shape}, grid has {info.mx} points")
    return LocalVector(info, u[info.gxs:info.gxe].copy())


def scatter(u: np.ndarray, views: List[GridView]) -> List[LocalVector]:
    """Halo exchange for every worker; blocks until all views are filled."""
    return [exchange(u, info) for info in views]


def gather(parts: List[np.ndarray], views: List[GridView]) -> np.ndarray:
    """Assemble per-worker owned arrays into a global vector."""
    mx = views[0].mx
    out = np.zeros(mx)
    for info, part in zip(views, parts):
        out[info.xs:info.xe] = part
    return out
