"""
Partitioned 1D structured grid on [-1, 1].

Vertex-centered grid with mx points:
- hx: Spacing 2 / (mx - 1)
- x(i): Coordinate -1 + i * hx
- Points 0 and mx - 1 carry Dirichlet data

Each worker sees the grid through a GridView describing its owned
half-open index range [xs, xs + xm) and its ghost range.
"""

import numpy as np
from dataclasses import dataclass
from typing import List

from .errors import ConfigurationError, DegenerateGrid

X_MIN = -1.0
X_MAX = 1.0


@dataclass(frozen=True)
class GridView:
    """
    One worker's view of the global grid.

    Attributes:
        mx: Global number of grid points
        xs: First owned global index
        xm: Number of owned points
        halo: Ghost width on each side of the owned range
        rank: Worker index in the decomposition
    """
    mx: int
    xs: int = 0
    xm: int = -1
    halo: int = 2
    rank: int = 0

    def __post_init__(self):
        if self.mx < 2:
            raise DegenerateGrid(f"grid needs at least 2 points, got mx={self.mx}")
        if self.xm < 0:
            object.__setattr__(self, 'xm', self.mx - self.xs)
        if self.xs < 0 or self.xs + self.xm > self.mx:
            raise IndexError(f"owned range [{self.xs}, {self.xe}) outside [0, {self.mx})")

    @property
    def xe(self) -> int:
        """One past the last owned index."""
        return self.xs + self.xm

    @property
    def hx(self) -> float:
        return (X_MAX - X_MIN) / (self.mx - 1)

    @property
    def gxs(self) -> int:
        """First ghosted index (clipped to the domain)."""
        return max(self.xs - self.halo, 0)

    @property
    def gxe(self) -> int:
        """One past the last ghosted index (clipped to the domain)."""
        return min(self.xe + self.halo, self.mx)

    def x(self, i):
        """Coordinate of global index i (scalar or array)."""
        return X_MIN + i * self.hx

    def coordinates(self) -> np.ndarray:
        """Coordinates of the owned points."""
        return self.x(np.arange(self.xs, self.xe))

    def is_boundary(self, i: int) -> bool:
        return i == 0 or i == self.mx - 1

    def in_domain(self, i: int) -> bool:
        return 0 <= i < self.mx

    def owns(self, i: int) -> bool:
        return self.xs <= i < self.xe

    def check_index(self, i: int):
        """Raise IndexError if i is not a grid index."""
        if not self.in_domain(i):
            raise IndexError(f"index {i} outside [0, {self.mx})")


def partition(mx: int, size: int = 1, halo: int = 2) -> List[GridView]:
    """
    Split [0, mx) into `size` contiguous owned ranges.

    The first mx % size workers get one extra point, so ranges differ in
    length by at most one.

    Args:
        mx: Global number of grid points
        size: Number of workers
        halo: Ghost width handed to every view

    Returns:
        One GridView per worker, ordered by rank
    """
    if mx < 2:
        raise DegenerateGrid(f"grid needs at least 2 points, got mx={mx}")
    if size < 1 or size > mx:
        raise ConfigurationError(f"cannot split {mx} points over {size} workers")

    base, extra = divmod(mx, size)
    views = []
    xs = 0
    for rank in range(size):
        xm = base + (1 if rank < extra else 0)
        views.append(GridView(mx=mx, xs=xs, xm=xm, halo=halo, rank=rank))
        xs += xm
    return views
