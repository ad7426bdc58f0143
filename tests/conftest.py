import pytest
from nuclear_numerov import PotentialParameters, calc_mass_factor


@pytest.fixture
def mass_factor() -> float:
    """Mass factor for a reduced mass of 469.46 MeV/c^2 (nucleon-nucleon)."""
    return calc_mass_factor(469.46)


@pytest.fixture
def params() -> PotentialParameters:
    return PotentialParameters(depth=40.0, radius=2.0, diffuseness=0.6)


@pytest.fixture
def free_params() -> PotentialParameters:
    return PotentialParameters(depth=0.0, radius=2.0, diffuseness=0.6)
