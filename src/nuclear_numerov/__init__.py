from nuclear_numerov import coupled, potentials, radial
from nuclear_numerov.coupled import Channel, CouplingSpec, extract_channel_wavefunction, solve_coupled_channels_numerov
from nuclear_numerov.potentials import PotentialParameters
from nuclear_numerov.radial import calc_wronskian, run_convergence_test, solve_numerov
from nuclear_numerov.units import HBARC, calc_mass_factor, ureg

__all__ = [
    "HBARC",
    "Channel",
    "CouplingSpec",
    "PotentialParameters",
    "calc_mass_factor",
    "calc_wronskian",
    "coupled",
    "extract_channel_wavefunction",
    "potentials",
    "radial",
    "run_convergence_test",
    "solve_coupled_channels_numerov",
    "solve_numerov",
    "ureg",
]


__version__ = "0.1.0"
