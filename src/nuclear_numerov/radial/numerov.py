import logging
import math
from typing import TYPE_CHECKING, Callable, Union

import numpy as np
from numba import njit

from nuclear_numerov.potentials.woods_saxon import as_potential_parameters
from nuclear_numerov.radial.effective_potential import calc_f_list, check_angular_momentum
from nuclear_numerov.radial.grid import RadialGrid
from nuclear_numerov.radial.start import calc_start_values

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nuclear_numerov.potentials import PotentialType
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.radial.start import StartStrategy

logger = logging.getLogger(__name__)

DENOMINATOR_TOLERANCE = 1e-8
"""Default threshold below which a Numerov denominator 1 - h^2/12 f_{n+1} is considered ill-conditioned."""


class NumericalInstabilityError(ArithmeticError):
    """Raised in strict mode if the Numerov integration runs into a numerical instability."""

    def __init__(self, index: int, r: float, reason: str) -> None:
        self.index = index
        self.r = r
        super().__init__(f"Numerical instability at grid index {index} (r={r:.6g} fm): {reason}")


def _run_numerov_integration_python(
    h: float,
    steps: int,
    u0: float,
    u1: float,
    f_list: Union["Sequence[float]", np.ndarray],
    strict: bool = False,
) -> tuple[np.ndarray, int]:
    r"""Run the Numerov integration algorithm.

    This means, run the Numerov method, which is defined for

    .. math::
        \frac{d^2}{dr^2} u(r) = f(r) u(r)

    as

    .. math::
        u_{n+1} = \frac{2 u_n - u_{n-1} + \frac{h^2}{12} (10 f_n u_n + f_{n-1} u_{n-1})}{1 - \frac{h^2}{12} f_{n+1}}

    Args:
        h: The step size of the integration.
        steps: The number of grid points N + 1.
        u0: The value of u at the first grid point.
        u1: The value of u at the second grid point.
        f_list: The values of f at each grid point, including one point beyond the last grid point.
        strict (default: False): Whether to stop at the first non-finite value of u.

    Returns:
        u_list: A numpy array of the values of u at each grid point.
        failed_index: The grid index of the first non-finite value if strict is True and the integration failed,
            -1 otherwise.

    """
    u_list = np.zeros(steps, dtype=np.float64)
    u_list[0] = u0
    u_list[1] = u1
    h2_12 = h * h / 12.0

    for n in range(1, steps - 1):
        numerator = (
            2.0 * u_list[n] - u_list[n - 1] + h2_12 * (10.0 * f_list[n] * u_list[n] + f_list[n - 1] * u_list[n - 1])
        )
        denominator = 1.0 - h2_12 * f_list[n + 1]
        u_list[n + 1] = numerator / denominator
        if strict and not math.isfinite(u_list[n + 1]):
            return u_list, n + 1

    return u_list, -1


# error_model="numpy": a vanishing denominator gives inf (like in the python version) instead of raising
run_numerov_integration: Callable[..., tuple[np.ndarray, int]] = njit(cache=True, error_model="numpy")(
    _run_numerov_integration_python
)


def check_denominators(
    f_list: np.ndarray, h: float, start: int, strict: bool, tolerance: float = DENOMINATOR_TOLERANCE
) -> None:
    """Check the Numerov denominators 1 - h^2/12 f_{n+1} for ill-conditioned steps.

    Args:
        f_list: The values of f at each grid point, or for coupled channels the diagonal values for one channel.
        h: The step size of the integration.
        start: The first grid index, for which the denominator is used.
        strict: Whether to raise an error (True) or just log a warning (False).
        tolerance (default: DENOMINATOR_TOLERANCE): Denominators with a smaller absolute value are ill-conditioned.

    """
    denominators = 1.0 - h * h / 12.0 * f_list[start:]
    (bad_indices,) = np.nonzero(np.abs(denominators) < tolerance)
    if len(bad_indices) == 0:
        return

    index = int(bad_indices[0]) + start
    if strict:
        raise NumericalInstabilityError(index, index * h, "ill-conditioned step, 1 - h^2/12 f is close to zero")
    logger.warning(
        "The Numerov denominator 1 - h^2/12 f is close to zero at %d grid points (first at r=%.6g fm), "
        "the integration will probably blow up.",
        len(bad_indices),
        index * h,
    )


def solve_numerov(
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    h: float,
    r_max: float,
    *,
    start: "StartStrategy" = "bessel_l1",
    potential_type: "PotentialType" = "woods_saxon",
    strict: bool = False,
    denominator_tolerance: float = DENOMINATOR_TOLERANCE,
    _use_njit: bool = True,
) -> np.ndarray:
    r"""Solve the radial Schrödinger equation using the Numerov method.

    We solve

    .. math::
        \frac{d^2}{dr^2} u(r) = f(r) u(r), \quad f(r) = f_m \left( V(r) + \frac{l(l+1)}{f_m r^2} - E \right)

    outward from the origin on the uniform grid r_n = n h, n = 0, ..., N with N = floor(r_max / h),
    see `run_numerov_integration`. The local truncation error is O(h^6).

    Args:
        energy: The energy E in MeV.
        l: The angular momentum quantum number.
        params: The potential parameters (V0, R0, a0).
        mass_factor: The mass factor 2 \mu / (\hbar c)^2 in MeV^{-1} fm^{-2}, see `calc_mass_factor`.
        h: The step size in fm.
        r_max: The maximum radial distance in fm.
        start (default: "bessel_l1"): How to calculate the seed value u(h), see `calc_start_values`.
        potential_type (default: "woods_saxon"): Which (real) potential to use.
        strict (default: False): Whether to raise a `NumericalInstabilityError` for ill-conditioned steps
            and as soon as a non-finite value occurs, instead of silently propagating it.
        denominator_tolerance (default: DENOMINATOR_TOLERANCE): Below which absolute value a Numerov denominator
            1 - h^2/12 f is considered ill-conditioned.
        _use_njit (default: True): Whether to use the fast njit version of the Numerov integration.

    Returns:
        u_list: A numpy array of the N + 1 values u(r_n), including the seed values u(0) = 0 and u(h).

    """
    check_angular_momentum(l)
    params = as_potential_parameters(params)
    if not mass_factor > 0:
        raise ValueError(f"The mass factor must be positive, but is {mass_factor=}")
    grid = RadialGrid(h, r_max)

    logger.debug("Numerov integration with E=%s MeV, l=%d, %r", energy, l, grid)

    f_list = calc_f_list(grid, energy, l, params, mass_factor, potential_type)
    check_denominators(f_list[: grid.steps], h, 2, strict, denominator_tolerance)
    u0, u1 = calc_start_values(h, energy, l, params, mass_factor, start)

    if _use_njit:
        u_list, failed_index = run_numerov_integration(h, grid.steps, u0, u1, f_list, strict)
    else:
        logger.warning("Using python implementation of Numerov integration, this is much slower!")
        u_list, failed_index = _run_numerov_integration_python(h, grid.steps, u0, u1, f_list, strict)

    if failed_index >= 0:
        raise NumericalInstabilityError(failed_index, failed_index * h, "non-finite wavefunction value")

    return u_list
