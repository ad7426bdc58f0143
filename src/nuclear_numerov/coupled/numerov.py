import logging
import math
from typing import TYPE_CHECKING, Callable

import numpy as np
from numba import njit

from nuclear_numerov.coupled.potential_matrix import calc_f_matrices, simplified_coupling
from nuclear_numerov.potentials.woods_saxon import as_potential_parameters
from nuclear_numerov.radial.grid import RadialGrid
from nuclear_numerov.radial.numerov import DENOMINATOR_TOLERANCE, NumericalInstabilityError, check_denominators
from nuclear_numerov.radial.start import calc_start_values

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nuclear_numerov.coupled.channel import Channel, CouplingSpec
    from nuclear_numerov.coupled.potential_matrix import CouplingModel
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.radial.start import StartStrategy

logger = logging.getLogger(__name__)


def _run_coupled_numerov_integration_python(
    h: float,
    steps: int,
    u0: np.ndarray,
    u1: np.ndarray,
    f_matrices: np.ndarray,
    strict: bool = False,
) -> tuple[np.ndarray, int]:
    r"""Run the Numerov integration algorithm for coupled channels.

    For each channel alpha the Numerov step reads

    .. math::
        u_{n+1}[\alpha] = \frac{2 u_n[\alpha] - u_{n-1}[\alpha]
        + \frac{h^2}{12} \sum_\beta (10 f_n[\alpha,\beta] u_n[\beta] + f_{n-1}[\alpha,\beta] u_{n-1}[\beta])}
        {1 - \frac{h^2}{12} f_{n+1}[\alpha,\alpha]}

    The off-diagonal couplings only enter the numerator (explicit coupling),
    so no linear system has to be solved in each step.

    Args:
        h: The step size of the integration.
        steps: The number of grid points N + 1.
        u0: The values of u at the first grid point for each channel.
        u1: The values of u at the second grid point for each channel.
        f_matrices: The f-matrices at each grid point with shape (N + 2, n, n).
        strict (default: False): Whether to stop at the first non-finite value of u.

    Returns:
        u_matrix: A numpy array with shape (n, N + 1) of the values of u for each channel at each grid point.
        failed_index: The grid index of the first non-finite value if strict is True and the integration failed,
            -1 otherwise.

    """
    n_channels = len(u0)
    u_matrix = np.zeros((n_channels, steps), dtype=np.float64)
    u_matrix[:, 0] = u0
    u_matrix[:, 1] = u1
    h2_12 = h * h / 12.0

    # n has to advance sequentially, the channels at fixed n are independent
    for n in range(1, steps - 1):
        for alpha in range(n_channels):
            sum_term = 0.0
            for beta in range(n_channels):
                sum_term += (
                    10.0 * f_matrices[n, alpha, beta] * u_matrix[beta, n]
                    + f_matrices[n - 1, alpha, beta] * u_matrix[beta, n - 1]
                )
            numerator = 2.0 * u_matrix[alpha, n] - u_matrix[alpha, n - 1] + h2_12 * sum_term
            denominator = 1.0 - h2_12 * f_matrices[n + 1, alpha, alpha]
            u_matrix[alpha, n + 1] = numerator / denominator
        if strict:
            for alpha in range(n_channels):
                if not math.isfinite(u_matrix[alpha, n + 1]):
                    return u_matrix, n + 1

    return u_matrix, -1


run_coupled_numerov_integration: Callable[..., tuple[np.ndarray, int]] = njit(cache=True, error_model="numpy")(
    _run_coupled_numerov_integration_python
)


def solve_coupled_channels_numerov(
    channels: "Sequence[Channel]",
    couplings: "Sequence[CouplingSpec]",
    energy_incident: float,
    mass_factor: float,
    params: "ParametersLike",
    h: float,
    r_max: float,
    *,
    start: "StartStrategy" = "bessel_l1",
    coupling_model: "CouplingModel" = simplified_coupling,
    strict: bool = False,
    denominator_tolerance: float = DENOMINATOR_TOLERANCE,
    _use_njit: bool = True,
) -> np.ndarray:
    r"""Solve the coupled channels equations using the Numerov method.

    We solve the system

    .. math::
        \frac{d^2}{dr^2} u_\alpha(r) = \sum_\beta f_{\alpha\beta}(r) u_\beta(r)

    outward from the origin, see `run_coupled_numerov_integration` and `calc_f_matrix`.
    Each channel is seeded independently with its own (l, E), see `calc_start_values`.

    Args:
        channels: The channels, the index of a channel in this sequence identifies it.
        couplings: The coupling specs between the channels.
        energy_incident: The incident energy in MeV, passed on to the coupling model.
        mass_factor: The mass factor 2 \mu / (\hbar c)^2 in MeV^{-1} fm^{-2}.
        params: The potential parameters (V0, R0, a0) shared by all channels.
        h: The step size in fm.
        r_max: The maximum radial distance in fm.
        start (default: "bessel_l1"): How to calculate the seed values u(h).
        coupling_model (default: `simplified_coupling`): How to calculate the coupling potentials.
        strict (default: False): Whether to raise a `NumericalInstabilityError` for ill-conditioned steps
            and as soon as a non-finite value occurs.
        denominator_tolerance (default: DENOMINATOR_TOLERANCE): Below which absolute value a Numerov denominator
            1 - h^2/12 f_{alpha alpha} is considered ill-conditioned.
        _use_njit (default: True): Whether to use the fast njit version of the Numerov integration.

    Returns:
        u_matrix: A numpy array with shape (n_channels, N + 1), row i is the wavefunction of channel i.

    Example:
        >>> channels = [Channel(0, 10.0, "ground"), Channel(2, 8.0, "excited")]
        >>> couplings = [CouplingSpec(0, 1, strength=1.0, beta=0.25)]
        >>> params = PotentialParameters(40.0, 2.0, 0.6)
        >>> solution = solve_coupled_channels_numerov(channels, couplings, 10.0, 0.0247, params, 0.01, 20.0)
        >>> u_ground = extract_channel_wavefunction(solution, 0)

    """
    if len(channels) == 0:
        raise ValueError("At least one channel is needed for a coupled channels calculation.")
    params = as_potential_parameters(params)
    if not mass_factor > 0:
        raise ValueError(f"The mass factor must be positive, but is {mass_factor=}")
    grid = RadialGrid(h, r_max)

    logger.debug("Coupled channels Numerov integration with %d channels, %r", len(channels), grid)

    f_matrices = calc_f_matrices(grid, channels, couplings, energy_incident, mass_factor, params, coupling_model)
    for alpha in range(len(channels)):
        check_denominators(f_matrices[: grid.steps, alpha, alpha], h, 2, strict, denominator_tolerance)

    start_values = [calc_start_values(h, ch.energy, ch.l, params, mass_factor, start) for ch in channels]
    u0 = np.array([u0 for u0, _ in start_values], dtype=float)
    u1 = np.array([u1 for _, u1 in start_values], dtype=float)

    if _use_njit:
        u_matrix, failed_index = run_coupled_numerov_integration(h, grid.steps, u0, u1, f_matrices, strict)
    else:
        logger.warning("Using python implementation of the coupled Numerov integration, this is much slower!")
        u_matrix, failed_index = _run_coupled_numerov_integration_python(h, grid.steps, u0, u1, f_matrices, strict)

    if failed_index >= 0:
        raise NumericalInstabilityError(failed_index, failed_index * h, "non-finite wavefunction value")

    return u_matrix


def extract_channel_wavefunction(coupled_solution: np.ndarray, channel_index: int) -> np.ndarray:
    """Extract the wavefunction of a single channel from a coupled channels solution.

    Args:
        coupled_solution: The result of `solve_coupled_channels_numerov`.
        channel_index: The (0-based) index of the channel.

    Returns:
        The wavefunction of the channel.

    """
    n_channels = len(coupled_solution)
    if not (isinstance(channel_index, (int, np.integer)) and 0 <= channel_index < n_channels):
        raise IndexError(f"Channel index {channel_index} is out of range for {n_channels} channels.")
    return coupled_solution[channel_index]  # type: ignore [no-any-return]
