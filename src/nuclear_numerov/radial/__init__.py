from nuclear_numerov.radial.diagnostics import (
    ConvergenceResult,
    calc_relative_variation,
    calc_wronskian,
    run_convergence_test,
)
from nuclear_numerov.radial.effective_potential import F_ORIGIN, calc_f_list, calc_f_r
from nuclear_numerov.radial.grid import RadialGrid
from nuclear_numerov.radial.numerov import (
    DENOMINATOR_TOLERANCE,
    NumericalInstabilityError,
    run_numerov_integration,
    solve_numerov,
)
from nuclear_numerov.radial.start import (
    StartStrategy,
    bessel_start_l1,
    calc_start_values,
    naive_power_start,
    riccati_bessel_start,
)

__all__ = [
    "DENOMINATOR_TOLERANCE",
    "F_ORIGIN",
    "ConvergenceResult",
    "NumericalInstabilityError",
    "RadialGrid",
    "StartStrategy",
    "bessel_start_l1",
    "calc_f_list",
    "calc_f_r",
    "calc_relative_variation",
    "calc_start_values",
    "calc_wronskian",
    "naive_power_start",
    "riccati_bessel_start",
    "run_convergence_test",
    "run_numerov_integration",
    "solve_numerov",
]
