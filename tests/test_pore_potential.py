from dataclasses import dataclass, field

import numpy as np
import pytest

from dftkit.external_potential import (
    CustomLJ93,
    CustomPotential,
    DoubleWell,
    FreeEnergyAveraged,
    HardWall,
    LJ93,
    SimpleLJ93,
    Steele,
)
from dftkit.geometry import Axis
from dftkit.pore_potential import (
    cylindrical_potential,
    external_potential_1d,
    spherical_potential,
)


@dataclass
class Fluid:
    sigma: list = field(default_factory=lambda: [1.0])
    epsilon: list = field(default_factory=lambda: [1.0])
    segments: list = field(default_factory=lambda: [1.0])

    def epsilon_k_ff(self):
        return np.array(self.epsilon)

    def sigma_ff(self):
        return np.array(self.sigma)

    def m(self):
        return np.array(self.segments)


R_GRID = np.linspace(0.5, 6.0, 12)
PORE = 8.0


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_hard_wall_in_curved_pore(func):
    fluid = Fluid(sigma=[1.0, 3.0], epsilon=[1.0, 1.0], segments=[1.0, 1.0])
    result = func(HardWall(sigma_ss=1.0), R_GRID, PORE, fluid, 1.0)
    assert result.shape == (2, len(R_GRID))
    for i, sigma_sf in enumerate([1.0, 2.0]):
        expected = np.where(R_GRID > PORE - sigma_sf, np.inf, 0.0)
        assert np.array_equal(result[i], expected)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
@pytest.mark.parametrize(
    "potential",
    [SimpleLJ93(sigma_ss=1.0, epsilon_k_ss=1.0), CustomLJ93([1.0], [1.0])],
)
def test_unavailable_potentials_raise(func, potential):
    with pytest.raises(ValueError):
        func(potential, R_GRID, PORE, Fluid(), 1.0)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_custom_potential_returned_unchanged(func):
    values = np.arange(6.0).reshape(2, 3)
    result = func(CustomPotential(values), R_GRID, PORE, Fluid(), 1.0)
    assert np.array_equal(result, values)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_lj93_linear_in_solid_density(func):
    single = func(LJ93(1.0, 2.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    double = func(LJ93(1.0, 2.0, 0.2), R_GRID, PORE, Fluid(), 1.0)
    assert np.all(np.isfinite(single))
    assert np.allclose(double, 2.0 * single)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_lj93_scales_with_root_of_solid_energy(func):
    base = func(LJ93(1.0, 1.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    strong = func(LJ93(1.0, 4.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    assert np.allclose(strong, 2.0 * base)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_steele_xi_scaling_and_default(func):
    default = func(Steele(1.0, 1.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    unity = func(Steele(1.0, 1.0, 0.1, xi=1.0), R_GRID, PORE, Fluid(), 1.0)
    doubled = func(Steele(1.0, 1.0, 0.1, xi=2.0), R_GRID, PORE, Fluid(), 1.0)
    assert np.all(np.isfinite(default))
    assert np.allclose(default, unity)
    assert np.allclose(doubled, 2.0 * default)


def test_cylindrical_double_well_without_tail_equals_lj93():
    well = cylindrical_potential(DoubleWell(1.0, 2.0, 0.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    lj = cylindrical_potential(LJ93(1.0, 2.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    assert np.allclose(well, lj)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_double_well_tail_only_lowers(func):
    without = func(DoubleWell(1.0, 2.0, 0.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    with_tail = func(DoubleWell(1.0, 2.0, 3.0, 0.1), R_GRID, PORE, Fluid(), 1.0)
    difference = with_tail - without
    assert difference.shape == (1, len(R_GRID))
    assert float(difference.max()) <= 1e-12


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_potential_scales_with_segment_number(func):
    one = func(LJ93(1.0, 1.0, 0.1), R_GRID, PORE, Fluid(segments=[1.0]), 1.0)
    three = func(LJ93(1.0, 1.0, 0.1), R_GRID, PORE, Fluid(segments=[3.0]), 1.0)
    assert np.allclose(three, 3.0 * one)


@pytest.mark.parametrize("func", [cylindrical_potential, spherical_potential])
def test_fea_beyond_cutoff_is_zero(func):
    potential = FreeEnergyAveraged(
        coordinates=np.zeros((3, 1)),
        sigma_ss=[1.0],
        epsilon_k_ss=[1.0],
        pore_center=(5.0, 5.0, 5.0),
        system_size=(10.0, 10.0, 10.0),
        n_grid=(4, 4),
        cutoff_radius=1e-3,
        max_potential=50.0,
    )
    result = func(potential, [1.0, 2.0], 4.0, Fluid(), 1.5)
    assert result.shape == (1, 2)
    assert np.allclose(result, 0.0)


def test_external_potential_1d_cartesian_hard_wall():
    axis = Axis.new_cartesian(40, 5.0, 2.0)
    cutoff = 50.0
    result = external_potential_1d(10.0, 1.0, HardWall(sigma_ss=1.0), Fluid(), axis, cutoff)
    # the wall sits at half the pore width (5.0); contact at sigma_sf = 1.0 from it
    expected = np.where(5.0 - axis.grid < 1.0, cutoff, 0.0)
    assert result.shape == (1, len(axis.grid))
    np.testing.assert_array_equal(result[0], expected)


def test_external_potential_1d_polar_hard_wall_clipped():
    axis = Axis.new_polar(32, 6.0)
    cutoff = 20.0
    result = external_potential_1d(6.0, 1.0, HardWall(sigma_ss=1.0), Fluid(), axis, cutoff)
    expected = np.where(axis.grid > 5.0, cutoff, 0.0)
    assert np.array_equal(result[0], expected)


def test_external_potential_1d_divides_by_temperature():
    axis = Axis.new_spherical(32, 6.0)
    potential = LJ93(1.0, 1.0, 0.01)
    cold = external_potential_1d(6.0, 1.0, potential, Fluid(), axis, 1e6)
    hot = external_potential_1d(6.0, 2.0, potential, Fluid(), axis, 1e6)
    finite = np.abs(cold) < 1e5
    assert finite.any()
    assert np.allclose(hot[finite], 0.5 * cold[finite])


def test_external_potential_1d_respects_cutoff():
    axis = Axis.new_cartesian(64, 5.0, 2.0)
    cutoff = 3.0
    result = external_potential_1d(10.0, 1.0, LJ93(1.0, 5.0, 0.5), Fluid(), axis, cutoff)
    assert result.shape == (1, 64)
    assert float(result.max()) == cutoff


def test_external_potential_1d_custom_potential_symmetric_sum():
    axis = Axis.new_cartesian(4, 5.0)
    values = np.ones((1, 4))
    result = external_potential_1d(10.0, 2.0, CustomPotential(values), Fluid(), axis, 100.0)
    assert np.allclose(result, values)