"""Diagnostics to validate the Numerov integration.

Both diagnostics only report numbers, deciding whether they are acceptable is left to the caller.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from nuclear_numerov.radial.effective_potential import calc_f_list
from nuclear_numerov.radial.grid import RadialGrid
from nuclear_numerov.radial.numerov import solve_numerov

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nuclear_numerov.potentials import PotentialType
    from nuclear_numerov.potentials.woods_saxon import ParametersLike

logger = logging.getLogger(__name__)


def calc_wronskian(
    u_list: "Sequence[float]",
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    h: float,
    potential_type: "PotentialType" = "woods_saxon",
) -> np.ndarray:
    r"""Calculate the discrete Wronskian-like quantity of a Numerov solution.

    .. math::
        W_n = \frac{h^2}{12} (f_n - f_{n+1}) u_n u_{n+1}

    for n = 1, ..., len(u_list) - 2. The index n = 0 is skipped, since u_0 = 0.

    Args:
        u_list: The wavefunction values u(r_n), e.g. from `solve_numerov`.
        energy: The energy E in MeV, that was used to calculate u_list.
        l: The angular momentum quantum number, that was used to calculate u_list.
        params: The potential parameters, that were used to calculate u_list.
        mass_factor: The mass factor, that was used to calculate u_list.
        h: The step size, that was used to calculate u_list.
        potential_type: The potential type, that was used to calculate u_list.

    Returns:
        w_list: A numpy array of the len(u_list) - 2 values W_n.

    """
    u_list = np.asarray(u_list, dtype=float)
    if len(u_list) < 3:
        raise ValueError(f"The Wronskian needs at least 3 wavefunction values, but got {len(u_list)}")

    grid = RadialGrid(h, (len(u_list) - 1) * h)
    f_list = calc_f_list(grid, energy, l, params, mass_factor, potential_type)

    n = np.arange(1, len(u_list) - 1)
    return h * h / 12.0 * (f_list[n] - f_list[n + 1]) * u_list[n] * u_list[n + 1]  # type: ignore [no-any-return]


def calc_relative_variation(w_list: "Sequence[float]") -> float:
    """Calculate the relative variation (max - min) / max(|W|) of a sequence.

    Returns 0 for a sequence, which is identically zero.
    """
    w_list = np.asarray(w_list, dtype=float)
    scale = np.max(np.abs(w_list))
    if scale == 0:
        return 0.0
    return float((np.max(w_list) - np.min(w_list)) / scale)


@dataclass
class ConvergenceResult:
    """Result of a Numerov step size convergence test."""

    errors: np.ndarray
    """Point-wise absolute errors |u_fine - u_test| on the test grid."""
    max_error: float
    """Maximum of the absolute errors."""
    mean_error: float
    """Mean of the absolute errors."""
    fine_count: int
    """Number of points of the fine solution."""
    test_count: int
    """Number of points of the test solution."""
    compared_count: int
    """Number of points, that were compared."""


def run_convergence_test(
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    h_fine: float,
    h_test: float,
    r_max: float,
    **kwargs: Any,
) -> ConvergenceResult:
    """Test the convergence of the Numerov integration by comparing a fine grid solution with a test solution.

    The fine solution is downsampled by the integer ratio h_test / h_fine.
    If the downsampled fine solution and the test solution differ in length (e.g. due to rounding of r_max / h),
    both are trimmed to the shorter length.

    Args:
        energy: The energy E in MeV.
        l: The angular momentum quantum number.
        params: The potential parameters.
        mass_factor: The mass factor in MeV^{-1} fm^{-2}.
        h_fine: The fine step size in fm.
        h_test: The test step size in fm, must be an integer multiple of h_fine.
        r_max: The maximum radial distance in fm.
        kwargs: Additional keyword arguments passed to `solve_numerov` for both solutions.

    Returns:
        The `ConvergenceResult` containing the point-wise, maximum and mean absolute errors.

    """
    if not (h_fine > 0 and h_test > 0):
        raise ValueError(f"The step sizes must be positive, but are {h_fine=}, {h_test=}")
    ratio = h_test / h_fine
    downsample_factor = round(ratio)
    if downsample_factor < 1 or not np.isclose(ratio, downsample_factor, rtol=1e-9, atol=0):
        raise ValueError(f"h_test must be an integer multiple of h_fine, but {h_test=}, {h_fine=}")

    u_fine = solve_numerov(energy, l, params, mass_factor, h_fine, r_max, **kwargs)
    u_test = solve_numerov(energy, l, params, mass_factor, h_test, r_max, **kwargs)

    u_fine_downsampled = u_fine[::downsample_factor]
    compared_count = min(len(u_fine_downsampled), len(u_test))
    if len(u_fine_downsampled) != len(u_test):
        logger.debug(
            "Trimming the downsampled fine solution (%d points) and the test solution (%d points) to %d points.",
            len(u_fine_downsampled),
            len(u_test),
            compared_count,
        )

    errors = np.abs(u_fine_downsampled[:compared_count] - u_test[:compared_count])
    return ConvergenceResult(
        errors=errors,
        max_error=float(np.max(errors)),
        mean_error=float(np.mean(errors)),
        fine_count=len(u_fine),
        test_count=len(u_test),
        compared_count=compared_count,
    )
