"""External potentials inside cylindrical and spherical pores, and the
reduced potential profile of a one-dimensional pore.

All quantities are reduced (dimensionless) floats.
"""

from __future__ import annotations

import math

import numpy as np

from .external_potential import (
    DELTA_STEELE,
    CustomLJ93,
    CustomPotential,
    DoubleWell,
    ExternalPotential,
    FreeEnergyAveraged,
    HardWall,
    LJ93,
    SimpleLJ93,
    Steele,
    _fluid_arrays,
)
from .geometry import Axis, AxisGeometry
from .solid import calculate_fea_potential

# Taylor coefficients of the hypergeometric functions in powers of x^2.
_PHI_COEFFICIENTS = {
    3: (1.0, 3.0 / 4.0, 3.0 / 64.0, -1.0 / 256.0, -15.0 / 16384.0),
    6: (1.0, 63.0 / 4.0, 2205.0 / 64.0, 3675.0 / 256.0, 11025.0 / 16384.0),
}
_PSI_COEFFICIENTS = {
    3: (1.0, 9.0 / 4.0, 9.0 / 64.0, 1.0 / 256.0, 9.0 / 16384.0),
    6: (1.0, 81.0 / 4.0, 3969.0 / 64.0, 11025.0 / 256.0, 99125.0 / 16384.0),
}


def _taylor(coefficients, x: np.ndarray) -> np.ndarray:
    x2 = x * x
    return sum(c * x2**k for k, c in enumerate(coefficients))


def _phi(n: int, r_r: np.ndarray, sigma_r: float) -> np.ndarray:
    m3n2 = 3.0 - 2.0 * n
    n2m3 = 2.0 * n - 3.0
    return (
        (1.0 - r_r**2) ** m3n2
        * 4.0
        * math.sqrt(math.pi)
        / n2m3
        * sigma_r**n2m3
        * math.gamma(n - 0.5)
        / math.gamma(n)
        * _taylor(_PHI_COEFFICIENTS[n], r_r)
    )


def _psi(n: int, r_r: np.ndarray, sigma_r: float) -> np.ndarray:
    return (
        (1.0 - r_r**2) ** (2.0 - 2.0 * n)
        * 4.0
        * math.sqrt(math.pi)
        * math.gamma(n - 0.5)
        / math.gamma(n)
        * sigma_r ** (2.0 * n - 2.0)
        * _taylor(_PSI_COEFFICIENTS[n], r_r)
    )


def _sum_n(n: int, r: np.ndarray, sigma: float, pore_size: float) -> np.ndarray:
    numerator = sigma**n
    return sum(
        numerator / (pore_size**i * (pore_size - r) ** (n - i))
        + numerator / (pore_size**i * (pore_size + r) ** (n - i))
        for i in range(n)
    )


def _combine(sigma_ss, epsilon_k_ss, sigma_ff, epsilon_k_ff):
    return 0.5 * (sigma_ff + sigma_ss), np.sqrt(epsilon_k_ff * epsilon_k_ss)


def _hard_wall(p: HardWall, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf = 0.5 * (sigma_ff + p.sigma_ss)
    return np.where(r > pore_size - sigma_sf, np.inf, 0.0)


def _fea(geometry: AxisGeometry):
    def component(p: FreeEnergyAveraged, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
        sigma_sf, epsilon_sf = _combine(p.sigma_ss, p.epsilon_k_ss, sigma_ff, epsilon_k_ff)
        return calculate_fea_potential(
            r,
            mi,
            p.coordinates,
            sigma_sf,
            epsilon_sf,
            p.pore_center,
            p.system_size,
            p.n_grid,
            temperature,
            geometry,
            p.cutoff_radius,
            p.max_potential,
        )

    return component


# cylindrical pores


def _cyl_lj93_wall(r, pore_size, sigma, prefactor):
    r_r = r / pore_size
    sigma_r = sigma / pore_size
    return (_phi(6, r_r, sigma_r) - _phi(3, r_r, sigma_r)) * prefactor


def _cyl_lj93(p: LJ93, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon_sf = _combine(p.sigma_ss, p.epsilon_k_ss, sigma_ff, epsilon_k_ff)
    prefactor = 2.0 * math.pi * mi * epsilon_sf * sigma_sf**3 * p.rho_s
    return _cyl_lj93_wall(r, pore_size, sigma_sf, prefactor)


def _cyl_steele(p: Steele, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon_sf = _combine(p.sigma_ss, p.epsilon_k_ss, sigma_ff, epsilon_k_ff)
    xi = 1.0 if p.xi is None else float(p.xi)
    r_r = r / pore_size
    sigma_r = sigma_sf / pore_size
    shifted = pore_size + DELTA_STEELE * 0.61
    return (
        (2.0 * math.pi * mi * xi * epsilon_sf)
        * (sigma_sf**2 * DELTA_STEELE * p.rho_s)
        * (
            _psi(6, r_r, sigma_r)
            - _psi(3, r_r, sigma_r)
            - sigma_sf / DELTA_STEELE * _phi(3, r / shifted, sigma_sf / shifted)
        )
    )


def _cyl_double_well(p: DoubleWell, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon1_sf = _combine(p.sigma_ss, p.epsilon1_k_ss, sigma_ff, epsilon_k_ff)
    epsilon2_sf = math.sqrt(epsilon_k_ff * p.epsilon2_k_ss)
    base = 2.0 * math.pi * mi * sigma_sf**3 * p.rho_s
    tail = np.minimum(_cyl_lj93_wall(r, pore_size, 2.0 * sigma_sf, base * epsilon2_sf), 0.0)
    return tail + _cyl_lj93_wall(r, pore_size, sigma_sf, base * epsilon1_sf)


_CYLINDRICAL = {
    HardWall: _hard_wall,
    LJ93: _cyl_lj93,
    Steele: _cyl_steele,
    DoubleWell: _cyl_double_well,
    FreeEnergyAveraged: _fea(AxisGeometry.POLAR),
}


# spherical pores


def _sph_lj93(p: LJ93, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon_sf = _combine(p.sigma_ss, p.epsilon_k_ss, sigma_ff, epsilon_k_ff)
    big = pore_size
    return (
        math.pi
        * mi
        * epsilon_sf
        * p.rho_s
        * (
            sigma_sf**12
            / 90.0
            * ((r - 9.0 * big) / (r - big) ** 9 - (r + 9.0 * big) / (r + big) ** 9)
            - sigma_sf**6
            / 3.0
            * ((r - 3.0 * big) / (r - big) ** 3 - (r + 3.0 * big) / (r + big) ** 3)
        )
        / r
    )


def _sph_10_4(r, pore_size, sigma):
    return 2.0 / 5.0 * _sum_n(10, r, sigma, pore_size) - _sum_n(4, r, sigma, pore_size)


def _sph_steele(p: Steele, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon_sf = _combine(p.sigma_ss, p.epsilon_k_ss, sigma_ff, epsilon_k_ff)
    xi = 1.0 if p.xi is None else float(p.xi)
    shifted = pore_size + 0.61 * DELTA_STEELE
    return (
        (2.0 * math.pi * mi * xi * epsilon_sf)
        * (sigma_sf**2 * DELTA_STEELE * p.rho_s)
        * (
            _sph_10_4(r, pore_size, sigma_sf)
            - sigma_sf
            / (3.0 * DELTA_STEELE)
            * (
                sigma_sf**3 / (shifted - r) ** 3
                + sigma_sf**3 / (shifted + r) ** 3
                + 1.5 * _sum_n(3, r, sigma_sf, shifted)
            )
        )
    )


def _sph_double_well(p: DoubleWell, r, pore_size, mi, sigma_ff, epsilon_k_ff, temperature):
    sigma_sf, epsilon1_sf = _combine(p.sigma_ss, p.epsilon1_k_ss, sigma_ff, epsilon_k_ff)
    epsilon2_sf = math.sqrt(epsilon_k_ff * p.epsilon2_k_ss)
    base = 2.0 * math.pi * mi * sigma_sf**2 * p.rho_s
    tail = np.minimum(base * epsilon2_sf * _sph_10_4(r, pore_size, 2.0 * sigma_sf), 0.0)
    return tail + base * epsilon1_sf * _sph_10_4(r, pore_size, sigma_sf)


_SPHERICAL = {
    HardWall: _hard_wall,
    LJ93: _sph_lj93,
    Steele: _sph_steele,
    DoubleWell: _sph_double_well,
    FreeEnergyAveraged: _fea(AxisGeometry.SPHERICAL),
}


def _evaluate(table, geometry_name, potential, r_grid, pore_size, fluid, temperature):
    if isinstance(potential, CustomPotential):
        return potential.potential.copy()
    component = next(
        (table[cls] for cls in type(potential).__mro__ if cls in table), None
    )
    if component is None:
        raise ValueError(
            f"{type(potential).__name__} potential is not available in {geometry_name} geometry"
        )
    r = np.atleast_1d(np.asarray(r_grid, dtype=float))
    pore_size = float(pore_size)
    temperature = float(temperature)
    m, sigma_ff, epsilon_k_ff = _fluid_arrays(fluid)
    result = np.zeros((len(m), len(r)))
    for i, mi in enumerate(m):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            result[i] = component(
                potential, r, pore_size, mi, sigma_ff[i], epsilon_k_ff[i], temperature
            )
    return result


def cylindrical_potential(potential, r_grid, pore_size, fluid, temperature) -> np.ndarray:
    """Potential at radii ``r_grid`` inside a cylindrical pore of radius ``pore_size``.

    Raises ``ValueError`` for potentials without a cylindrical form
    (``SimpleLJ93`` and ``CustomLJ93``).
    """
    return _evaluate(
        _CYLINDRICAL, "cylindrical", potential, r_grid, pore_size, fluid, temperature
    )


def spherical_potential(potential, r_grid, pore_size, fluid, temperature) -> np.ndarray:
    """Potential at radii ``r_grid`` inside a spherical pore of radius ``pore_size``.

    Raises ``ValueError`` for potentials without a spherical form
    (``SimpleLJ93`` and ``CustomLJ93``).
    """
    return _evaluate(
        _SPHERICAL, "spherical", potential, r_grid, pore_size, fluid, temperature
    )


def external_potential_1d(
    pore_width, temperature, potential: ExternalPotential, fluid, axis: Axis, potential_cutoff
) -> np.ndarray:
    """Reduced external potential (divided by temperature) on a 1D pore axis.

    A slit pore of width ``pore_width`` is built from two opposing walls at
    half the width from the axis origin; cylindrical and spherical pores use
    ``pore_width`` as radius. Points beyond the pore and values above
    ``potential_cutoff`` are set to ``potential_cutoff``.
    """
    pore_width = float(pore_width)
    temperature = float(temperature)
    potential_cutoff = float(potential_cutoff)
    grid = np.asarray(axis.grid, dtype=float)

    if axis.geometry is AxisGeometry.CARTESIAN:
        effective = 0.5 * pore_width
        values = potential.cartesian(effective + grid, fluid, temperature) + potential.cartesian(
            effective - grid, fluid, temperature
        )
    elif axis.geometry is AxisGeometry.SPHERICAL:
        effective = pore_width
        values = spherical_potential(potential, grid, effective, fluid, temperature)
    else:
        effective = pore_width
        values = cylindrical_potential(potential, grid, effective, fluid, temperature)

    values = np.array(values, dtype=float) / temperature
    values[:, grid > effective] = potential_cutoff
    return np.where(values > potential_cutoff, potential_cutoff, values)


__all__ = [
    "cylindrical_potential",
    "spherical_potential",
    "external_potential_1d",
    "CustomLJ93",
    "SimpleLJ93",
]