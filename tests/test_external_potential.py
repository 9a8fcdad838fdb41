from dataclasses import dataclass, field

import numpy as np
import pytest

from dftkit.external_potential import (
    CustomLJ93,
    CustomPotential,
    DoubleWell,
    FluidParameters,
    FreeEnergyAveraged,
    HardWall,
    LJ93,
    SimpleLJ93,
    Steele,
)
from dftkit.geometry import AxisGeometry
from dftkit.solid import calculate_fea_potential


@dataclass
class Fluid:
    sigma: np.ndarray = field(default_factory=lambda: np.array([3.0, 4.0]))
    epsilon: np.ndarray = field(default_factory=lambda: np.array([100.0, 200.0]))
    segments: np.ndarray = field(default_factory=lambda: np.array([1.0, 2.0]))

    def epsilon_k_ff(self):
        return self.epsilon

    def sigma_ff(self):
        return self.sigma

    def m(self):
        return self.segments


Z = np.linspace(1.0, 12.0, 23)


def test_fluid_satisfies_protocol():
    fluid = Fluid()
    assert isinstance(fluid, FluidParameters)
    pot = HardWall(sigma_ss=1.0).cartesian(np.array([1.0, 10.0]), fluid, 300.0)
    assert pot.shape == (2, 2)
    np.testing.assert_array_equal(pot[:, 1], [0.0, 0.0])
    np.testing.assert_array_equal(pot[:, 0], [np.inf, np.inf])


def test_hard_wall_boundary():
    pot = HardWall(sigma_ss=3.0).cartesian(Z, Fluid(), 300.0)
    assert pot.shape == (2, len(Z))
    sigma_sf = np.array([3.0, 3.5])
    for i in range(2):
        assert np.all(np.isinf(pot[i][Z < sigma_sf[i]]))
        assert np.all(pot[i][Z >= sigma_sf[i]] == 0.0)


def test_simple_lj93_zero_at_sigma_sf():
    fluid = Fluid()
    sigma_sf = 0.5 * (fluid.sigma + 3.0)
    for i in range(2):
        pot = SimpleLJ93(sigma_ss=3.0, epsilon_k_ss=50.0).cartesian(
            np.array([sigma_sf[i]]), fluid, 300.0
        )
        assert pot[i, 0] == pytest.approx(0.0, abs=1e-10)


def test_custom_lj93_matches_simple_lj93():
    fluid = Fluid()
    sigma_sf = 0.5 * (fluid.sigma + 3.0)
    epsilon_sf = np.sqrt(fluid.epsilon * 50.0)
    simple = SimpleLJ93(sigma_ss=3.0, epsilon_k_ss=50.0).cartesian(Z, fluid, 300.0)
    custom = CustomLJ93(sigma_sf=sigma_sf, epsilon_k_sf=epsilon_sf).cartesian(Z, fluid, 300.0)
    np.testing.assert_allclose(custom, simple)


def test_custom_lj93_length_mismatch():
    with pytest.raises(ValueError):
        CustomLJ93(sigma_sf=[1.0, 2.0], epsilon_k_sf=[1.0])


def test_custom_lj93_too_few_components():
    with pytest.raises(ValueError):
        CustomLJ93(sigma_sf=[1.0], epsilon_k_sf=[1.0]).cartesian(Z, Fluid(), 300.0)


def test_lj93_linear_in_density_and_segments():
    fluid = Fluid()
    a = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, fluid, 300.0)
    b = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.16).cartesian(Z, fluid, 300.0)
    np.testing.assert_allclose(b, 2.0 * a)
    doubled = Fluid(segments=np.array([2.0, 4.0]))
    c = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, doubled, 300.0)
    np.testing.assert_allclose(c, 2.0 * a)


def test_lj93_attractive_far_repulsive_near():
    pot = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, Fluid(), 300.0)
    assert pot.shape == (2, len(Z))
    assert float(pot[:, 0].min()) > 0.0
    assert float(pot[:, -1].max()) < 0.0


def test_zero_fluid_energy_gives_zero_potential():
    fluid = Fluid(epsilon=np.zeros(2))
    pot = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, fluid, 300.0)
    np.testing.assert_array_equal(pot, np.zeros_like(pot))


def test_double_well_without_second_well_is_lj93():
    fluid = Fluid()
    lj = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, fluid, 300.0)
    dw = DoubleWell(
        sigma_ss=3.0, epsilon1_k_ss=50.0, epsilon2_k_ss=0.0, rho_s=0.08
    ).cartesian(Z, fluid, 300.0)
    np.testing.assert_allclose(dw, lj)


def test_double_well_not_above_lj93():
    fluid = Fluid()
    lj = LJ93(sigma_ss=3.0, epsilon_k_ss=50.0, rho_s=0.08).cartesian(Z, fluid, 300.0)
    dw = DoubleWell(
        sigma_ss=3.0, epsilon1_k_ss=50.0, epsilon2_k_ss=30.0, rho_s=0.08
    ).cartesian(Z, fluid, 300.0)
    difference = dw - lj
    assert difference.shape == (2, len(Z))
    assert float(difference.max()) <= 1e-12
    assert float(difference.min()) < 0.0


def test_steele_xi_default_and_scaling():
    fluid = Fluid()
    default = Steele(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114).cartesian(Z, fluid, 300.0)
    one = Steele(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114, xi=1.0).cartesian(Z, fluid, 300.0)
    half = Steele(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114, xi=0.5).cartesian(Z, fluid, 300.0)
    np.testing.assert_allclose(default, one)
    np.testing.assert_allclose(half, 0.5 * one)


def test_steele_decays_far_from_wall():
    far = Steele(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114).cartesian(
        np.array([3.0, 1000.0]), Fluid(), 300.0
    )
    assert np.all(np.abs(far[:, 1]) < 1e-3 * np.abs(far[:, 0]))


def test_custom_potential_returned_unchanged():
    values = np.arange(6.0).reshape(2, 3)
    custom = CustomPotential(values)
    pot = custom.cartesian(Z, Fluid(), 300.0)
    np.testing.assert_array_equal(pot, values)
    pot[0, 0] = 99.0
    assert custom.potential[0, 0] == 0.0


def test_free_energy_averaged_matches_solid_module():
    fluid = Fluid()
    coordinates = np.array([[0.0, 5.0], [1.0, 4.0], [2.0, 3.0]])
    sigma_ss = np.array([3.0, 3.5])
    epsilon_ss = np.array([30.0, 40.0])
    fea = FreeEnergyAveraged(
        coordinates=coordinates,
        sigma_ss=sigma_ss,
        epsilon_k_ss=epsilon_ss,
        pore_center=(5.0, 5.0, 5.0),
        system_size=(10.0, 10.0, 10.0),
        n_grid=(4, 5),
        cutoff_radius=8.0,
        max_potential=50.0,
    )
    grid = np.array([2.0, 4.0, 6.0])
    pot = fea.cartesian(grid, fluid, 300.0)
    assert pot.shape == (2, 3)
    for i in range(2):
        expected = calculate_fea_potential(
            grid,
            fluid.segments[i],
            coordinates,
            0.5 * (fluid.sigma[i] + sigma_ss),
            np.sqrt(fluid.epsilon[i] * epsilon_ss),
            (5.0, 5.0, 5.0),
            (10.0, 10.0, 10.0),
            (4, 5),
            300.0,
            AxisGeometry.CARTESIAN,
            8.0,
            50.0,
        )
        np.testing.assert_allclose(pot[i], expected)


def test_free_energy_averaged_beyond_cutoff_is_zero():
    fea = FreeEnergyAveraged(
        coordinates=np.array([[50.0], [50.0], [50.0]]),
        sigma_ss=[3.0],
        epsilon_k_ss=[30.0],
        pore_center=(0.0, 0.0, 0.0),
        system_size=(100.0, 100.0, 100.0),
        n_grid=(3, 3),
        cutoff_radius=5.0,
        max_potential=50.0,
    )
    pot = fea.cartesian(np.array([1.0, 2.0]), Fluid(), 300.0)
    np.testing.assert_allclose(pot, np.zeros((2, 2)), atol=1e-12)