import logging
import math
from typing import TYPE_CHECKING

import numpy as np

from nuclear_numerov.potentials import get_potential
from nuclear_numerov.potentials.woods_saxon import as_potential_parameters

if TYPE_CHECKING:
    from nuclear_numerov.potentials import PotentialType
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.radial.grid import RadialGrid

logger = logging.getLogger(__name__)

F_ORIGIN = math.inf
"""Sentinel for f(r=0), where the centrifugal term diverges.

It is only ever multiplied by u(0) = 0, so the Numerov recursion never uses this value,
see `calc_f_list` for how the origin is treated on a grid.
"""


def check_angular_momentum(l: int) -> None:
    if not (isinstance(l, (int, np.integer)) and l >= 0):
        raise ValueError(f"l must be a non-negative integer, but is {l=}")


def calc_f_r(
    r: float,
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    potential_type: "PotentialType" = "woods_saxon",
) -> float:
    r"""Calculate the coefficient function f(r) of the radial Schrödinger equation u''(r) = f(r) u(r).

    .. math::
        f(r) = f_m \left( V(r) + \frac{l(l+1)}{f_m r^2} - E \right)

    where f_m = 2 \mu / (\hbar c)^2 is the mass factor.

    Args:
        r: The radial distance in fm.
        energy: The energy E in MeV.
        l: The angular momentum quantum number.
        params: The potential parameters.
        mass_factor: The mass factor 2 \mu / (\hbar c)^2 in MeV^{-1} fm^{-2}.
        potential_type: Which (real) potential to use. Default: "woods_saxon".

    Returns:
        f(r) in fm^{-2}, or the sentinel `F_ORIGIN` for r = 0.

    """
    if r == 0:
        return F_ORIGIN
    v_potential = get_potential(potential_type)(r, params)
    v_centrifugal = l * (l + 1) / (mass_factor * r * r)
    return float(mass_factor * (v_potential + v_centrifugal - energy))


def calc_f_list(
    grid: "RadialGrid",
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    potential_type: "PotentialType" = "woods_saxon",
) -> np.ndarray:
    """Calculate f(r) on all N + 2 points of the extended grid.

    The value at the origin is set to 0.
    Since u(0) = 0 the product f(0) u(0) vanishes anyway, and setting f(0) = 0 explicitly
    avoids evaluating inf * 0 = nan in the recursion.

    Returns:
        f_list: A numpy array of the values f(r_n) for n = 0, ..., N + 1.

    """
    params = as_potential_parameters(params)
    r_list = grid.r_list_extended[1:]

    v_potential = get_potential(potential_type)(r_list, params)
    if np.iscomplexobj(v_potential):
        raise ValueError(f"The Numerov integration only supports real potentials, but got {potential_type=}")
    v_centrifugal = l * (l + 1) / (mass_factor * r_list * r_list)

    f_list = np.zeros(grid.steps + 1, dtype=float)
    f_list[1:] = mass_factor * (v_potential + v_centrifugal - energy)
    return f_list
