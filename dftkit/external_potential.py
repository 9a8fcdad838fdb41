"""External potentials of solid walls acting on fluid segments.

Potentials are evaluated in reduced units. Every potential maps a grid of
wall distances to an array of shape ``(components, grid points)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Protocol, runtime_checkable

import numpy as np

from .geometry import AxisGeometry
from .solid import calculate_fea_potential

DELTA_STEELE = 3.35


@runtime_checkable
class FluidParameters(Protocol):
    """Fluid parameters needed to evaluate an external potential."""

    def epsilon_k_ff(self) -> np.ndarray:
        """Dispersion energy of every segment (reduced)."""

    def sigma_ff(self) -> np.ndarray:
        """Segment diameter of every segment (reduced)."""

    def m(self) -> np.ndarray:
        """Number of segments of every component."""


def _fluid_arrays(fluid) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    m = np.atleast_1d(np.asarray(fluid.m(), dtype=float))
    sigma_ff = np.atleast_1d(np.asarray(fluid.sigma_ff(), dtype=float))
    epsilon_k_ff = np.atleast_1d(np.asarray(fluid.epsilon_k_ff(), dtype=float))
    if len(sigma_ff) < len(m) or len(epsilon_k_ff) < len(m):
        raise ValueError("fluid parameters must cover every component")
    return m, sigma_ff, epsilon_k_ff


def _lj93_wall(z, sigma_sf, prefactor):
    """Prefactor times 2 (sigma/z)^9 - 15 (sigma/z)^3."""
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        x = sigma_sf / z
        return prefactor * (2.0 * x**9 - 15.0 * x**3)


class ExternalPotential(ABC):
    """Base class of all external potentials."""

    def cartesian(self, z_grid, fluid, temperature) -> np.ndarray:
        """Potential at distances ``z_grid`` from a planar wall."""
        z = np.atleast_1d(np.asarray(z_grid, dtype=float))
        m, sigma_ff, epsilon_k_ff = _fluid_arrays(fluid)
        result = np.zeros((len(m), len(z)))
        for i, mi in enumerate(m):
            with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
                result[i] = self._cartesian_component(
                    z, i, mi, sigma_ff[i], epsilon_k_ff[i], float(temperature)
                )
        return result

    @abstractmethod
    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        """Potential of component ``i`` at distances ``z``."""


@dataclass
class HardWall(ExternalPotential):
    """Infinite repulsion closer than sigma_sf = (sigma_ss + sigma_ii) / 2."""

    sigma_ss: float

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        return np.where(z < sigma_sf, np.inf, 0.0)


@dataclass
class LJ93(ExternalPotential):
    """9-3 Lennard-Jones wall with solid density ``rho_s``."""

    sigma_ss: float
    epsilon_k_ss: float
    rho_s: float

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        epsilon_sf = np.sqrt(epsilon_k_ff * self.epsilon_k_ss)
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        prefactor = 2.0 * np.pi * mi * epsilon_sf * sigma_sf**3 * self.rho_s / 45.0
        return _lj93_wall(z, sigma_sf, prefactor)


def _simple_lj93(z, sigma_sf, epsilon_sf):
    x = sigma_sf / z
    return epsilon_sf * (x**9 - x**3)


@dataclass
class SimpleLJ93(ExternalPotential):
    """Simple 9-3 Lennard-Jones wall using combining rules."""

    sigma_ss: float
    epsilon_k_ss: float

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        epsilon_sf = np.sqrt(epsilon_k_ff * self.epsilon_k_ss)
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        return _simple_lj93(z, sigma_sf, epsilon_sf)


@dataclass
class CustomLJ93(ExternalPotential):
    """Simple 9-3 Lennard-Jones wall with explicit solid-fluid parameters."""

    sigma_sf: np.ndarray
    epsilon_k_sf: np.ndarray

    def __post_init__(self) -> None:
        self.sigma_sf = np.atleast_1d(np.asarray(self.sigma_sf, dtype=float))
        self.epsilon_k_sf = np.atleast_1d(np.asarray(self.epsilon_k_sf, dtype=float))
        if self.sigma_sf.shape != self.epsilon_k_sf.shape:
            raise ValueError("sigma_sf and epsilon_k_sf must have the same length")

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        if i >= len(self.sigma_sf):
            raise ValueError("CustomLJ93 parameters must cover every component")
        return _simple_lj93(z, self.sigma_sf[i], self.epsilon_k_sf[i])


@dataclass
class Steele(ExternalPotential):
    """Steele 10-4-3 potential with interlayer spacing 3.35."""

    sigma_ss: float
    epsilon_k_ss: float
    rho_s: float
    xi: Optional[float] = None

    @property
    def _xi(self) -> float:
        return 1.0 if self.xi is None else float(self.xi)

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        epsilon_sf = np.sqrt(epsilon_k_ff * self.epsilon_k_ss)
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        x = sigma_sf / z
        return (
            (2.0 * np.pi * mi * self._xi * epsilon_sf)
            * (sigma_sf**2 * DELTA_STEELE * self.rho_s)
            * (
                0.4 * x**10
                - x**4
                - sigma_sf**4 / ((3.0 * DELTA_STEELE) * (z + 0.61 * DELTA_STEELE) ** 3)
            )
        )


@dataclass
class DoubleWell(ExternalPotential):
    """Sum of a 9-3 wall and the attractive tail of a wider 9-3 wall."""

    sigma_ss: float
    epsilon1_k_ss: float
    epsilon2_k_ss: float
    rho_s: float

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        epsilon1_sf = np.sqrt(epsilon_k_ff * self.epsilon1_k_ss)
        epsilon2_sf = np.sqrt(epsilon_k_ff * self.epsilon2_k_ss)
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        base = 2.0 * np.pi * mi * sigma_sf**3 * self.rho_s / 45.0
        tail = np.minimum(_lj93_wall(z, 2.0 * sigma_sf, base * epsilon2_sf), 0.0)
        return tail + _lj93_wall(z, sigma_sf, base * epsilon1_sf)


@dataclass
class FreeEnergyAveraged(ExternalPotential):
    """Free-energy averaged potential of an explicit solid structure."""

    coordinates: np.ndarray
    sigma_ss: np.ndarray
    epsilon_k_ss: np.ndarray
    pore_center: tuple
    system_size: tuple
    n_grid: tuple
    cutoff_radius: float
    max_potential: float

    def __post_init__(self) -> None:
        self.coordinates = np.asarray(self.coordinates, dtype=float)
        self.sigma_ss = np.atleast_1d(np.asarray(self.sigma_ss, dtype=float))
        self.epsilon_k_ss = np.atleast_1d(np.asarray(self.epsilon_k_ss, dtype=float))

    def _component(self, grid, mi, sigma_ff, epsilon_k_ff, temperature, geometry):
        epsilon_sf = np.sqrt(epsilon_k_ff * self.epsilon_k_ss)
        sigma_sf = 0.5 * (sigma_ff + self.sigma_ss)
        return calculate_fea_potential(
            grid,
            mi,
            self.coordinates,
            sigma_sf,
            epsilon_sf,
            self.pore_center,
            self.system_size,
            self.n_grid,
            temperature,
            geometry,
            self.cutoff_radius,
            self.max_potential,
        )

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        return self._component(
            z, mi, sigma_ff, epsilon_k_ff, temperature, AxisGeometry.CARTESIAN
        )


@dataclass
class CustomPotential(ExternalPotential):
    """A fixed, precomputed potential returned unchanged for any grid."""

    potential: np.ndarray = field(default_factory=lambda: np.zeros((0, 0)))

    def __post_init__(self) -> None:
        self.potential = np.asarray(self.potential, dtype=float)

    def cartesian(self, z_grid, fluid, temperature) -> np.ndarray:
        return self.potential.copy()

    def _cartesian_component(self, z, i, mi, sigma_ff, epsilon_k_ff, temperature):
        return self.potential[i].copy()