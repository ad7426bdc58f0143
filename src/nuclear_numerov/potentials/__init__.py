from nuclear_numerov.potentials.registry import (
    PotentialType,
    UnknownPotentialTypeError,
    get_potential,
    potential_at_radius,
)
from nuclear_numerov.potentials.woods_saxon import (
    InvalidParameterError,
    PotentialParameters,
    woods_saxon,
    woods_saxon_complex,
    woods_saxon_derivative,
)

__all__ = [
    "InvalidParameterError",
    "PotentialParameters",
    "PotentialType",
    "UnknownPotentialTypeError",
    "get_potential",
    "potential_at_radius",
    "woods_saxon",
    "woods_saxon_complex",
    "woods_saxon_derivative",
]
