"""Woods-Saxon potentials for the radial Schrödinger equation.

All functions accept a scalar or a numpy array for the radial coordinate r (in fm)
and either a `PotentialParameters` object or the sequence form [V0, R0, a0] or [V0, R0, a0, W0].
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import numpy as np

if TYPE_CHECKING:
    from nuclear_numerov.units import NDArray

    ParametersLike = Union["PotentialParameters", Sequence[float]]


class InvalidParameterError(ValueError):
    """Raised if the potential parameters do not describe a valid potential."""


@dataclass(frozen=True)
class PotentialParameters:
    """Parameters of a (complex) Woods-Saxon potential."""

    depth: float
    """Real potential depth V0 in MeV."""
    radius: float
    """Radius parameter R0 in fm."""
    diffuseness: float
    """Diffuseness parameter a0 in fm."""
    imaginary_depth: Optional[float] = None
    """Imaginary potential depth W0 in MeV, only used by the complex potential."""

    def __post_init__(self) -> None:
        if self.diffuseness == 0:
            raise InvalidParameterError(
                f"The diffuseness a0 must not be zero, since the potential divides by it, but is {self.diffuseness=}"
            )

    @classmethod
    def from_sequence(cls, params: Sequence[float]) -> "PotentialParameters":
        """Create the parameters from the sequence form [V0, R0, a0] or [V0, R0, a0, W0]."""
        if len(params) not in (3, 4):
            raise InvalidParameterError(f"Expected [V0, R0, a0] or [V0, R0, a0, W0], but got {params=}")
        return cls(*params)


def as_potential_parameters(params: "ParametersLike") -> PotentialParameters:
    if isinstance(params, PotentialParameters):
        return params
    return PotentialParameters.from_sequence(params)


def _calc_exp_arg(r: "NDArray", params: PotentialParameters) -> "NDArray":
    # far outside the nucleus exp overflows to inf, which correctly gives a vanishing potential
    with np.errstate(over="ignore"):
        return np.exp((r - params.radius) / params.diffuseness)  # type: ignore [no-any-return]


def woods_saxon(r: Union[float, "NDArray"], params: "ParametersLike") -> Union[float, "NDArray"]:
    r"""Calculate the Woods-Saxon potential V(r) in MeV.

    .. math::
        V(r) = -\frac{V_0}{1 + \exp((r - R_0) / a_0)}

    Args:
        r: The radial distance in fm.
        params: The potential parameters (V0, R0, a0).

    Returns:
        V: The potential in MeV.

    """
    params = as_potential_parameters(params)
    return -params.depth / (1.0 + _calc_exp_arg(r, params))  # type: ignore [no-any-return]


def woods_saxon_derivative(r: Union[float, "NDArray"], params: "ParametersLike") -> Union[float, "NDArray"]:
    r"""Calculate the radial derivative dV/dr of the Woods-Saxon potential in MeV/fm.

    .. math::
        \frac{dV}{dr} = \frac{V_0}{a_0} \frac{\exp((r - R_0)/a_0)}{[1 + \exp((r - R_0)/a_0)]^2}

    Args:
        r: The radial distance in fm.
        params: The potential parameters (V0, R0, a0).

    Returns:
        dV/dr: The derivative in MeV/fm.

    """
    params = as_potential_parameters(params)
    exp_val = _calc_exp_arg(r, params)
    # rewritten as e / (1 + e)^2 = 1 / ((1 + e) (1 + 1/e)) to stay finite when e overflows
    with np.errstate(divide="ignore"):
        derivative = params.depth / (params.diffuseness * (1.0 + exp_val) * (1.0 + 1.0 / exp_val))
    return derivative  # type: ignore [no-any-return]


def woods_saxon_complex(r: Union[float, "NDArray"], params: "ParametersLike") -> Union[complex, "NDArray"]:
    r"""Calculate the complex Woods-Saxon (optical) potential in MeV.

    .. math::
        V(r) = -\frac{V_0 + i W_0}{1 + \exp((r - R_0) / a_0)}

    If no imaginary depth W0 is given, W0 = 0 is used.
    """
    params = as_potential_parameters(params)
    imaginary_depth = params.imaginary_depth if params.imaginary_depth is not None else 0.0
    return -(params.depth + 1j * imaginary_depth) / (1.0 + _calc_exp_arg(r, params))  # type: ignore [no-any-return]
