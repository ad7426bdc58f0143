import math

import numpy as np


class RadialGrid:
    """A grid object storing all relevant information about the uniform radial grid.

    The grid points are r_n = n * h for n = 0, ..., N with N = floor(r_max / h).
    The Numerov recursion needs f(r) one point beyond the last grid point,
    therefore the grid also provides the extended list with N + 2 points.
    """

    def __init__(self, h: float, r_max: float) -> None:
        """Initialize the grid object.

        Args:
            h: The step size of the grid in fm.
            r_max: The maximum radial distance in fm.
                If r_max is not a multiple of h, the last grid point is the largest multiple of h below r_max.

        """
        if not (math.isfinite(h) and math.isfinite(r_max)):
            raise ValueError(f"The step size h and the maximum radius r_max must be finite, but are {h=}, {r_max=}")
        if not h > 0:
            raise ValueError(f"The step size h must be positive, but is {h=}")
        if not r_max > 0:
            raise ValueError(f"The maximum radius r_max must be positive, but is {r_max=}")

        # the small relative tolerance avoids losing the last point, e.g. for r_max / h = 20.0 / 0.1
        n_max = math.floor(r_max / h * (1 + 1e-9))
        if n_max < 2:
            raise ValueError(f"The grid needs at least 3 points, but {r_max=} and {h=} only give {n_max + 1}.")

        self._h = h
        self._n_max = n_max

    def __len__(self) -> int:
        return self.steps

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(h={self.h}, r_max={self.r_max}, steps={self.steps})"

    @property
    def h(self) -> float:
        """The step size of the grid in fm."""
        return self._h

    @property
    def n_max(self) -> int:
        """The index N of the last grid point."""
        return self._n_max

    @property
    def steps(self) -> int:
        """The number of grid points N + 1."""
        return self._n_max + 1

    @property
    def r_max(self) -> float:
        """The radial distance of the last grid point in fm."""
        return self._n_max * self._h

    @property
    def r_list(self) -> np.ndarray:
        """The grid points r_n = n * h for n = 0, ..., N."""
        return np.arange(self.steps) * self._h

    @property
    def r_list_extended(self) -> np.ndarray:
        """The grid points r_n = n * h for n = 0, ..., N + 1."""
        return np.arange(self.steps + 1) * self._h
