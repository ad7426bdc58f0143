from nuclear_numerov.coupled.channel import Channel, CouplingSpec, build_coupling_map, get_coupling
from nuclear_numerov.coupled.numerov import (
    extract_channel_wavefunction,
    run_coupled_numerov_integration,
    solve_coupled_channels_numerov,
)
from nuclear_numerov.coupled.potential_matrix import (
    CouplingModel,
    calc_f_matrices,
    calc_f_matrix,
    calc_potential_matrix,
    null_coupling,
    simplified_coupling,
)

__all__ = [
    "Channel",
    "CouplingModel",
    "CouplingSpec",
    "build_coupling_map",
    "calc_f_matrices",
    "calc_f_matrix",
    "calc_potential_matrix",
    "extract_channel_wavefunction",
    "get_coupling",
    "null_coupling",
    "run_coupled_numerov_integration",
    "simplified_coupling",
    "solve_coupled_channels_numerov",
]
