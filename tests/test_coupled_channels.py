import numpy as np
import pytest
from nuclear_numerov import (
    Channel,
    CouplingSpec,
    PotentialParameters,
    extract_channel_wavefunction,
    solve_coupled_channels_numerov,
    solve_numerov,
)
from nuclear_numerov.coupled import (
    build_coupling_map,
    calc_f_matrices,
    calc_f_matrix,
    calc_potential_matrix,
    get_coupling,
    null_coupling,
)
from nuclear_numerov.potentials import woods_saxon
from nuclear_numerov.radial import NumericalInstabilityError, RadialGrid, calc_f_r

CHANNELS = [Channel(0, 10.0, "ground"), Channel(2, 8.0, "excited")]


def test_channel() -> None:
    channel = Channel(2, 8.0)
    assert channel.label is None
    with pytest.raises(ValueError, match="non-negative integer"):
        Channel(-1, 8.0)
    with pytest.raises(AttributeError):
        channel.l = 3  # type: ignore [misc]


def test_coupling_map() -> None:
    coupling = CouplingSpec(2, 0, strength=0.5, beta=0.3)
    assert coupling.key == (0, 2)

    coupling_map = build_coupling_map([coupling, CouplingSpec(0, 1)], 3)
    assert get_coupling(coupling_map, 0, 2) is coupling
    assert get_coupling(coupling_map, 2, 0) is coupling
    assert get_coupling(coupling_map, 1, 0) == CouplingSpec(0, 1, strength=1.0, beta=0.1)
    assert get_coupling(coupling_map, 1, 2) is None


@pytest.mark.parametrize(
    ("couplings", "match"),
    [
        ([CouplingSpec(1, 1)], "coupled to itself"),
        ([CouplingSpec(0, 2)], "outside of"),
        ([CouplingSpec(-1, 0)], "outside of"),
        ([CouplingSpec(0, 1), CouplingSpec(1, 0, strength=2.0)], "coupled twice"),
    ],
)
def test_malformed_couplings(couplings: list[CouplingSpec], match: str) -> None:
    with pytest.raises(ValueError, match=match):
        build_coupling_map(couplings, 2)


def test_potential_matrix(params: PotentialParameters) -> None:
    channels = [*CHANNELS, Channel(4, 5.0)]
    couplings = [CouplingSpec(2, 0, strength=0.5, beta=0.3)]
    r = 2.5
    v_matrix = calc_potential_matrix(r, channels, couplings, 10.0, params)
    v = woods_saxon(r, params)

    assert v_matrix.shape == (3, 3)
    np.testing.assert_array_equal(v_matrix, v_matrix.T)
    for i in range(3):
        assert np.isclose(v_matrix[i, i], v, rtol=1e-14)
    assert np.isclose(v_matrix[0, 2], 0.5 * v * 0.3)
    assert v_matrix[0, 1] == v_matrix[1, 2] == 0

    r_list = np.linspace(0.0, 10.0, 11)
    v_matrices = calc_potential_matrix(r_list, channels, couplings, 10.0, params)
    assert v_matrices.shape == (11, 3, 3)
    np.testing.assert_allclose(v_matrices[5], calc_potential_matrix(r_list[5], channels, couplings, 10.0, params))


def test_custom_coupling_model(params: PotentialParameters) -> None:
    def constant_coupling(r, channel_i, channel_j, coupling, energy_incident, params):  # type: ignore [no-untyped-def]
        return np.full_like(r, -coupling.strength)

    couplings = [CouplingSpec(0, 1, strength=2.0)]
    v_matrix = calc_potential_matrix(1.0, CHANNELS, couplings, 10.0, params, constant_coupling)
    assert v_matrix[0, 1] == v_matrix[1, 0] == -2.0

    v_matrix = calc_potential_matrix(1.0, CHANNELS, couplings, 10.0, params, null_coupling)
    assert v_matrix[0, 1] == v_matrix[1, 0] == 0


def test_f_matrix(params: PotentialParameters, mass_factor: float) -> None:
    couplings = [CouplingSpec(0, 1, strength=1.0, beta=0.25)]
    r = 1.5
    f_matrix = calc_f_matrix(r, CHANNELS, couplings, 10.0, mass_factor, params)
    for i, channel in enumerate(CHANNELS):
        assert np.isclose(f_matrix[i, i], calc_f_r(r, channel.energy, channel.l, params, mass_factor), rtol=1e-12)
    v_matrix = calc_potential_matrix(r, CHANNELS, couplings, 10.0, params)
    assert np.isclose(f_matrix[0, 1], mass_factor * v_matrix[0, 1])
    assert f_matrix[0, 1] == f_matrix[1, 0]

    f_origin = calc_f_matrix(0.0, CHANNELS, couplings, 10.0, mass_factor, params)
    assert np.all(np.isinf(np.diag(f_origin)))
    assert np.isfinite(f_origin[0, 1])

    grid = RadialGrid(0.1, 5.0)
    f_matrices = calc_f_matrices(grid, CHANNELS, couplings, 10.0, mass_factor, params)
    assert f_matrices.shape == (grid.steps + 1, 2, 2)
    np.testing.assert_array_equal(f_matrices[0], 0.0)
    assert np.all(np.isfinite(f_matrices))
    np.testing.assert_allclose(f_matrices[15], calc_f_matrix(1.5, CHANNELS, couplings, 10.0, mass_factor, params))


@pytest.mark.parametrize(
    ("couplings", "coupling_model"),
    [
        ([], None),
        ([CouplingSpec(0, 1, strength=0.0)], None),
        ([CouplingSpec(0, 1, strength=1.0, beta=0.5)], null_coupling),
    ],
)
def test_uncoupled_channels_match_single_channel(
    params: PotentialParameters, mass_factor: float, couplings: list[CouplingSpec], coupling_model: object
) -> None:
    kwargs = {} if coupling_model is None else {"coupling_model": coupling_model}
    solution = solve_coupled_channels_numerov(CHANNELS, couplings, 10.0, mass_factor, params, 0.01, 20.0, **kwargs)
    assert solution.shape == (2, 2001)

    for i, channel in enumerate(CHANNELS):
        u_single = solve_numerov(channel.energy, channel.l, params, mass_factor, 0.01, 20.0)
        np.testing.assert_allclose(
            extract_channel_wavefunction(solution, i), u_single, rtol=1e-12, atol=1e-14 * np.max(np.abs(u_single))
        )


def test_single_channel_system(params: PotentialParameters, mass_factor: float) -> None:
    solution = solve_coupled_channels_numerov([Channel(1, 5.0)], [], 5.0, mass_factor, params, 0.05, 10.0)
    u_single = solve_numerov(5.0, 1, params, mass_factor, 0.05, 10.0)
    np.testing.assert_allclose(solution[0], u_single, rtol=1e-12, atol=1e-14 * np.max(np.abs(u_single)))


def test_coupling_changes_solution(params: PotentialParameters, mass_factor: float) -> None:
    couplings = [CouplingSpec(0, 1, strength=1.0, beta=0.25)]
    coupled = solve_coupled_channels_numerov(CHANNELS, couplings, 10.0, mass_factor, params, 0.02, 15.0)
    uncoupled = solve_coupled_channels_numerov(CHANNELS, [], 10.0, mass_factor, params, 0.02, 15.0)

    assert np.all(np.isfinite(coupled))
    np.testing.assert_array_equal(coupled[:, :2], uncoupled[:, :2])
    assert not np.allclose(coupled[0], uncoupled[0])
    assert not np.allclose(coupled[1], uncoupled[1])


def test_coupled_njit_matches_python(params: PotentialParameters, mass_factor: float) -> None:
    channels = [*CHANNELS, Channel(1, 6.0)]
    couplings = [CouplingSpec(0, 1, beta=0.25), CouplingSpec(2, 1, strength=0.5)]
    u_njit = solve_coupled_channels_numerov(channels, couplings, 10.0, mass_factor, params, 0.05, 15.0)
    u_python = solve_coupled_channels_numerov(
        channels, couplings, 10.0, mass_factor, params, 0.05, 15.0, _use_njit=False
    )
    np.testing.assert_allclose(u_njit, u_python, rtol=1e-12, atol=1e-14 * np.max(np.abs(u_python)))


def test_extract_channel_wavefunction(params: PotentialParameters, mass_factor: float) -> None:
    channels = [*CHANNELS, Channel(1, 6.0)]
    solution = solve_coupled_channels_numerov(channels, [CouplingSpec(0, 2)], 10.0, mass_factor, params, 0.1, 10.0)
    for i in range(len(channels)):
        np.testing.assert_array_equal(extract_channel_wavefunction(solution, i), solution[i])

    for invalid_index in [3, -1, 1.0]:
        with pytest.raises(IndexError, match="out of range"):
            extract_channel_wavefunction(solution, invalid_index)  # type: ignore [arg-type]


def test_invalid_coupled_input(params: PotentialParameters, mass_factor: float) -> None:
    with pytest.raises(ValueError, match="At least one channel"):
        solve_coupled_channels_numerov([], [], 10.0, mass_factor, params, 0.1, 10.0)
    with pytest.raises(ValueError, match="coupled to itself"):
        solve_coupled_channels_numerov(CHANNELS, [CouplingSpec(0, 0)], 10.0, mass_factor, params, 0.1, 10.0)
    with pytest.raises(ValueError, match="step size"):
        solve_coupled_channels_numerov(CHANNELS, [], 10.0, mass_factor, params, -0.1, 10.0)


def test_coupled_strict_mode(free_params: PotentialParameters, mass_factor: float) -> None:
    h = 0.1
    channels = [Channel(0, 10.0), Channel(0, -12 / (h * h * mass_factor))]
    with pytest.raises(NumericalInstabilityError, match="ill-conditioned"):
        solve_coupled_channels_numerov(channels, [], 10.0, mass_factor, free_params, h, 5.0, strict=True)


@pytest.mark.parametrize("use_njit", [True, False])
def test_coupled_strict_mode_overflow(free_params: PotentialParameters, mass_factor: float, use_njit: bool) -> None:
    # the second channel has f = 1e4 fm^-2, it grows by a factor of about 10 per step and overflows
    channels = [Channel(0, 10.0), Channel(0, -1e4 / mass_factor)]

    solution = solve_coupled_channels_numerov(
        channels, [], 10.0, mass_factor, free_params, 0.5, 400.0, _use_njit=use_njit
    )
    assert not np.all(np.isfinite(solution))

    with pytest.raises(NumericalInstabilityError, match="non-finite") as exc_info:
        solve_coupled_channels_numerov(
            channels, [], 10.0, mass_factor, free_params, 0.5, 400.0, strict=True, _use_njit=use_njit
        )
    index = exc_info.value.index
    assert 2 < index < 801
    assert np.isclose(exc_info.value.r, index * 0.5)
    assert np.all(np.isfinite(solution[:, :index]))
    assert not np.all(np.isfinite(solution[:, index]))
