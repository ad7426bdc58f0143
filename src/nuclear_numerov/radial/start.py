r"""Starting values for the outward Numerov integration from the origin.

The three-term Numerov recursion needs two seed values, u(0) and u(h).
Since the radial wavefunction u(r) = r R(r) vanishes at the origin, u(0) = 0 for all strategies,
the strategies only differ in the value u(h).
"""

import logging
from typing import TYPE_CHECKING, Literal, Union, get_args

import numpy as np
from scipy.special import spherical_jn

from nuclear_numerov.potentials.woods_saxon import as_potential_parameters

if TYPE_CHECKING:
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.units import NDArray

logger = logging.getLogger(__name__)

StartStrategy = Literal["bessel_l1", "power_law", "riccati_bessel"]


def _riccati_bessel_f1_series(z_squared: Union[float, "NDArray"]) -> Union[float, "NDArray"]:
    return z_squared / 3.0 - z_squared * z_squared / 30.0


def bessel_start_l1(r: Union[float, "NDArray"], q: Union[float, "NDArray"]) -> Union[float, "NDArray"]:
    r"""Power series of the l=1 Riccati-Bessel function F_1 near the origin.

    .. math::
        F_1(z) = \frac{\sin(z)}{z} - \cos(z) \approx \frac{z^2}{3} - \frac{z^4}{30}

    with z = q r. The direct evaluation of sin(z)/z - cos(z) suffers from cancellation
    and underflow for small z, the series does not.

    Args:
        r: The radial distance in fm.
        q: The wavenumber in fm^{-1}.

    Returns:
        The starting value u(r).

    """
    z = q * r
    return _riccati_bessel_f1_series(z * z)


def naive_power_start(r: Union[float, "NDArray"], l: int) -> Union[float, "NDArray"]:
    """Naive power law start u(r) = r^(l+1).

    Not numerically robust for large l or small h, mainly useful for comparisons.
    """
    return r ** (l + 1)  # type: ignore [no-any-return]


def riccati_bessel_start(r: Union[float, "NDArray"], q: float, l: int) -> Union[float, "NDArray"]:
    """Exact Riccati-Bessel function F_l(z) = z j_l(z) with z = q r."""
    z = q * r
    return z * spherical_jn(l, z)  # type: ignore [no-any-return]


def calc_start_values(
    h: float,
    energy: float,
    l: int,
    params: "ParametersLike",
    mass_factor: float,
    strategy: StartStrategy = "bessel_l1",
) -> tuple[float, float]:
    r"""Calculate the two seed values (u(0), u(h)) for the Numerov recursion.

    The wavenumber inside the potential well is given by

    .. math::
        q^2 = f_m (E + V_0)

    For the "bessel_l1" strategy the series is evaluated with q^2 directly,
    so for E + V_0 < 0 its analytic continuation is used instead of a nan.

    Args:
        h: The step size in fm.
        energy: The energy E in MeV.
        l: The angular momentum quantum number.
        params: The potential parameters, only the depth V0 is used.
        mass_factor: The mass factor 2 \mu / (\hbar c)^2 in MeV^{-1} fm^{-2}.
        strategy: Which starting strategy to use, one of "bessel_l1" (default), "power_law", "riccati_bessel".

    Returns:
        u0, u1: The values of u at r=0 and r=h.

    """
    params = as_potential_parameters(params)
    q_squared = mass_factor * (energy + params.depth)

    if strategy == "bessel_l1":
        u1 = _riccati_bessel_f1_series(q_squared * h * h)
    elif strategy == "power_law":
        u1 = naive_power_start(h, l)
    elif strategy == "riccati_bessel":
        if not q_squared > 0:
            raise ValueError(f"The riccati_bessel start needs E + V0 > 0, but {energy=} and {params.depth=}")
        u1 = riccati_bessel_start(h, np.sqrt(q_squared), l)
    else:
        raise ValueError(f"Invalid start strategy: {strategy}, must be one of {get_args(StartStrategy)}")

    if u1 == 0:
        logger.warning("The starting value u(h) is zero (strategy=%s), the integration will give u = 0.", strategy)

    return 0.0, float(u1)
