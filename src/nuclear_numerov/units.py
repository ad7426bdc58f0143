from typing import TYPE_CHECKING, Any, Union

import numpy as np
from pint import UnitRegistry

if TYPE_CHECKING:
    from pint.facets.plain import PlainQuantity

    NDArray = np.ndarray[Any, Any]
    PintFloat = PlainQuantity[float]

ureg = UnitRegistry()

HBARC = 197.7
"""hbar * c in MeV fm, the value used throughout the nuclear calculations."""


def calc_mass_factor(mu: Union[float, "PintFloat"], unit: str = "MeV/c**2") -> float:
    r"""Calculate the mass factor 2 \mu / (\hbar c)^2 in MeV^{-1} fm^{-2}.

    .. math::
        f_m = \frac{2 \mu}{(\hbar c)^2}

    Args:
        mu: The reduced mass, either a plain number given in `unit` or a pint quantity of any mass unit.
        unit: The unit of `mu` if it is given as a plain number. Default: MeV/c^2.

    Returns:
        The mass factor in MeV^{-1} fm^{-2}.

    """
    if isinstance(mu, ureg.Quantity):
        mu_mev = mu.to("MeV/c**2").magnitude
    elif unit == "MeV/c**2":
        mu_mev = mu
    else:
        mu_mev = ureg.Quantity(mu, unit).to("MeV/c**2").magnitude

    if not mu_mev > 0:
        raise ValueError(f"The reduced mass must be positive, but is {mu_mev=} MeV/c^2")
    return float(2 * mu_mev / (HBARC * HBARC))
