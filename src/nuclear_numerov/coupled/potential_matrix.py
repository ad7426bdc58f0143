r"""Potential matrix and f-matrix of the coupled channels equations.

The coupled radial equations read

.. math::
    \frac{d^2}{dr^2} u_\alpha(r) = \sum_\beta f_{\alpha\beta}(r) u_\beta(r),
    \quad f_{\alpha\beta}(r) = f_m \left( V_{\alpha\beta}(r)
    + \delta_{\alpha\beta} \left[ \frac{l_\alpha(l_\alpha+1)}{f_m r^2} - E_\alpha \right] \right)

All functions accept a scalar r, returning a (n, n) matrix, or an array of radii, returning a (len(r), n, n) array.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, Union

import numpy as np

from nuclear_numerov.coupled.channel import CouplingSpec, build_coupling_map, get_coupling
from nuclear_numerov.potentials import woods_saxon
from nuclear_numerov.potentials.woods_saxon import PotentialParameters, as_potential_parameters
from nuclear_numerov.radial.effective_potential import F_ORIGIN

if TYPE_CHECKING:
    from nuclear_numerov.coupled.channel import Channel
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.radial.grid import RadialGrid
    from nuclear_numerov.units import NDArray

logger = logging.getLogger(__name__)


class CouplingModel(Protocol):
    """Calculates the coupling potential V_ij(r) in MeV between two coupled channels."""

    def __call__(
        self,
        r: Union[float, "NDArray"],
        channel_i: "Channel",
        channel_j: "Channel",
        coupling: CouplingSpec,
        energy_incident: float,
        params: PotentialParameters,
    ) -> Union[float, "NDArray"]: ...


def simplified_coupling(
    r: Union[float, "NDArray"],
    channel_i: "Channel",
    channel_j: "Channel",
    coupling: CouplingSpec,
    energy_incident: float,
    params: PotentialParameters,
) -> Union[float, "NDArray"]:
    """Simplified coupling V_ij(r) = strength * V(r) * beta, reusing the Woods-Saxon shape of the diagonal.

    This is a placeholder and not a physically derived coupling potential,
    for real applications pass e.g. a collective model transition potential as coupling model.
    """
    return coupling.strength * woods_saxon(r, params) * coupling.beta  # type: ignore [no-any-return]


def null_coupling(
    r: Union[float, "NDArray"],
    channel_i: "Channel",
    channel_j: "Channel",
    coupling: CouplingSpec,
    energy_incident: float,
    params: PotentialParameters,
) -> Union[float, "NDArray"]:
    """Coupling matrix element, which vanishes for every pair of channels."""
    return np.zeros_like(r, dtype=float)  # type: ignore [no-any-return]


def calc_potential_matrix(
    r: Union[float, "NDArray"],
    channels: Sequence["Channel"],
    couplings: Sequence[CouplingSpec],
    energy_incident: float,
    params: "ParametersLike",
    coupling_model: CouplingModel = simplified_coupling,
) -> np.ndarray:
    """Calculate the potential matrix V_ij(r) in MeV.

    The diagonal holds the Woods-Saxon potential of each channel,
    the off-diagonal entries hold the coupling potential of the coupled channels and zero otherwise.

    Args:
        r: The radial distance(s) in fm.
        channels: The channels.
        couplings: The coupling specs between the channels.
        energy_incident: The incident energy in MeV, passed on to the coupling model.
        params: The potential parameters shared by all channels.
        coupling_model: How to calculate the coupling potential. Default: `simplified_coupling`.

    Returns:
        The potential matrix with shape (n, n) for scalar r, or (len(r), n, n) for an array r.

    """
    params = as_potential_parameters(params)
    coupling_map = build_coupling_map(couplings, len(channels))
    r = np.asarray(r, dtype=float)
    n_channels = len(channels)

    v_diagonal = woods_saxon(r, params)
    v_matrix = np.zeros((*r.shape, n_channels, n_channels), dtype=float)
    for i in range(n_channels):
        v_matrix[..., i, i] = v_diagonal

    for (i, j), coupling in coupling_map.items():
        v_ij = coupling_model(r, channels[i], channels[j], coupling, energy_incident, params)
        v_matrix[..., i, j] = v_ij
        v_matrix[..., j, i] = v_ij

    return v_matrix


def calc_f_matrix(
    r: Union[float, "NDArray"],
    channels: Sequence["Channel"],
    couplings: Sequence[CouplingSpec],
    energy_incident: float,
    mass_factor: float,
    params: "ParametersLike",
    coupling_model: CouplingModel = simplified_coupling,
) -> np.ndarray:
    """Calculate the f-matrix f_ij(r) in fm^{-2} of the coupled channels equations.

    The diagonal entries equal `calc_f_r` for each channel's own (l, E),
    the off-diagonal entries are mass_factor * V_ij(r).
    At r = 0 the diagonal entries are the sentinel `F_ORIGIN`.

    Returns:
        The f-matrix with shape (n, n) for scalar r, or (len(r), n, n) for an array r.

    """
    v_matrix = calc_potential_matrix(r, channels, couplings, energy_incident, params, coupling_model)
    r = np.asarray(r, dtype=float)
    is_origin = r == 0

    f_matrix = mass_factor * v_matrix
    r_nonzero = np.where(is_origin, 1.0, r)
    for i, channel in enumerate(channels):
        v_centrifugal = channel.l * (channel.l + 1) / (mass_factor * r_nonzero * r_nonzero)
        f_diagonal = mass_factor * (v_matrix[..., i, i] + v_centrifugal - channel.energy)
        f_matrix[..., i, i] = np.where(is_origin, F_ORIGIN, f_diagonal)

    return f_matrix


def calc_f_matrices(
    grid: "RadialGrid",
    channels: Sequence["Channel"],
    couplings: Sequence[CouplingSpec],
    energy_incident: float,
    mass_factor: float,
    params: "ParametersLike",
    coupling_model: CouplingModel = simplified_coupling,
) -> np.ndarray:
    """Calculate the f-matrices on all N + 2 points of the extended grid.

    The whole f-matrix at the origin is set to 0, since it only multiplies u(0) = 0.

    Returns:
        f_matrices: A numpy array with shape (N + 2, n, n).

    """
    n_channels = len(channels)
    f_matrices = np.zeros((grid.steps + 1, n_channels, n_channels), dtype=float)
    f_matrices[1:] = calc_f_matrix(
        grid.r_list_extended[1:], channels, couplings, energy_incident, mass_factor, params, coupling_model
    )
    return f_matrices
