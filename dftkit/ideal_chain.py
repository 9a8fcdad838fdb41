"""Ideal chain contribution to the Helmholtz energy of chain fluids."""

from __future__ import annotations

import sys
from enum import Enum

import numpy as np

_EPSILON = sys.float_info.epsilon


class Contributions(Enum):
    """Which parts of the Helmholtz energy to include."""

    TOTAL = "total"
    RESIDUAL = "residual"
    IDEAL_GAS = "ideal_gas"
    RESIDUAL_P = "residual_p"


class IdealChainContribution:
    """Bonding contribution of ideal (non-interacting) chains of segments."""

    def __init__(self, component_index, m):
        self.component_index = np.atleast_1d(np.asarray(component_index, dtype=int))
        self.m = np.atleast_1d(np.asarray(m, dtype=float))
        if self.component_index.shape != self.m.shape:
            raise ValueError("component_index and m must have the same length")
        if len(self.component_index) == 0:
            raise ValueError("at least one segment is required")

    def helmholtz_energy(self, partial_density, volume) -> float:
        """Reduced Helmholtz energy of a homogeneous state.

        Heterosegmented systems (more segments than components) give zero.
        """
        segments = len(self.component_index)
        if self.component_index[-1] + 1 != segments:
            return 0.0
        partial_density = np.atleast_1d(np.asarray(partial_density, dtype=float))
        density = partial_density[self.component_index]
        energy = density * (self.m - 1.0) * (np.log(np.abs(density) + _EPSILON) - 1.0)
        return float(energy.sum() * float(volume))

    def helmholtz_energy_density(self, density, contributions=Contributions.TOTAL) -> np.ndarray:
        """Reduced Helmholtz energy density from segment density profiles.

        ``density`` has the segments along its first axis; the result has the
        shape of a single profile.
        """
        density = np.asarray(density, dtype=float)
        if density.ndim == 0 or density.shape[0] != len(self.m):
            raise ValueError(f"density must hold {len(self.m)} segment profiles")
        contributions = Contributions(contributions)
        if contributions is Contributions.TOTAL:
            m = self.m
        elif contributions is Contributions.RESIDUAL:
            m = self.m - 1.0
        elif contributions is Contributions.IDEAL_GAS:
            m = np.ones(density.shape[0])
        else:
            raise ValueError(f"{contributions.name} is not available for density profiles")
        with np.errstate(divide="ignore", invalid="ignore"):
            return sum((np.log(rho) - 1.0) * mi * rho for rho, mi in zip(density, m))

    def __str__(self) -> str:
        return "Ideal chain"