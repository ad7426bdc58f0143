from typing import TYPE_CHECKING, Callable, Literal, Union, get_args

from nuclear_numerov.potentials.woods_saxon import woods_saxon, woods_saxon_complex

if TYPE_CHECKING:
    from nuclear_numerov.potentials.woods_saxon import ParametersLike
    from nuclear_numerov.units import NDArray

    PotentialFunction = Callable[[Union[float, NDArray], ParametersLike], Union[float, complex, NDArray]]

PotentialType = Literal["woods_saxon", "woods_saxon_complex"]

_POTENTIALS: dict[str, "PotentialFunction"] = {
    "woods_saxon": woods_saxon,
    "woods_saxon_complex": woods_saxon_complex,
}


class UnknownPotentialTypeError(ValueError):
    """Raised if a potential type is requested, for which no implementation is registered."""

    def __init__(self, potential_type: str) -> None:
        self.potential_type = potential_type
        super().__init__(
            f"Unknown potential type: {potential_type!r}, available potential types are {get_args(PotentialType)}"
        )


def get_potential(potential_type: PotentialType) -> "PotentialFunction":
    """Return the potential function registered for the given potential type."""
    try:
        return _POTENTIALS[potential_type]
    except KeyError:
        raise UnknownPotentialTypeError(potential_type) from None


def potential_at_radius(
    r: Union[float, "NDArray"], potential_type: PotentialType, params: "ParametersLike"
) -> Union[float, complex, "NDArray"]:
    """Calculate the potential of the given type at the radial distance r.

    Args:
        r: The radial distance in fm.
        potential_type: Which potential to evaluate, see `PotentialType`.
        params: The potential parameters.

    Returns:
        The potential value (complex for "woods_saxon_complex").

    """
    return get_potential(potential_type)(r, params)
