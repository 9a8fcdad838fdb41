"""Hard-sphere Helmholtz energy functionals from fundamental measure theory."""

from __future__ import annotations

import math
from enum import Enum

import numpy as np

from .ideal_chain import IdealChainContribution

PI36M1 = 1.0 / (36.0 * math.pi)
N3_CUTOFF = 1e-5


class FMTVersion(Enum):
    """Versions of fundamental measure theory."""

    WHITE_BEAR = "WB"
    KIERLIK_ROSINBERG = "KR"
    ANTI_SYM_WHITE_BEAR = "AntiSymWB"


_WHITE_BEAR_LIKE = (FMTVersion.WHITE_BEAR, FMTVersion.ANTI_SYM_WHITE_BEAR)


class HardSphereProperties:
    """Properties of a mixture of plain hard spheres."""

    def __init__(self, sigma):
        self.sigma = np.atleast_1d(np.asarray(sigma, dtype=float))

    def component_index(self) -> np.ndarray:
        return np.arange(len(self.sigma))

    def chain_length(self) -> np.ndarray:
        return np.ones(len(self.sigma))

    def hs_diameter(self, temperature) -> np.ndarray:
        """Hard-sphere diameters; independent of temperature."""
        return self.sigma.copy()


class FMTContribution:
    """Hard-sphere functional contribution.

    Weighted densities are laid out along the first axis. For a single
    component in the White Bear versions the rows are ``n2, n3, n2v...``;
    otherwise ``n0, n1, n2, n3`` followed, for the White Bear versions,
    by the vector densities ``n1v...`` and ``n2v...``.
    """

    def __init__(self, properties, version=FMTVersion.WHITE_BEAR):
        self.properties = properties
        self.version = FMTVersion(version)

    def _pure_layout(self) -> bool:
        return self.version in _WHITE_BEAR_LIKE and len(self.properties.chain_length()) == 1

    def helmholtz_energy_density(self, temperature, weighted_densities) -> np.ndarray:
        """Reduced Helmholtz energy density for the given weighted densities."""
        wd = np.asarray(weighted_densities, dtype=float)
        pure = self._pure_layout()
        rows = wd.shape[0] if wd.ndim > 0 else 0
        if rows < (2 if pure else 4):
            raise ValueError("too few weighted densities for this functional")

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            if pure:
                r = self.properties.hs_diameter(temperature)[0] * 0.5
                n2, n3 = wd[0], wd[1]
                n0 = n2 / (r * r * 4.0 * math.pi)
                n1 = n2 / (r * 4.0 * math.pi)
            else:
                n0, n1, n2, n3 = wd[0], wd[1], wd[2], wd[3]

            if self.version in _WHITE_BEAR_LIKE:
                if pure:
                    n2v = wd[2:]
                    n1v = n2v / (r * 4.0 * math.pi)
                else:
                    if (rows - 4) % 2:
                        raise ValueError("vector weighted densities must come in pairs")
                    dim = (rows - 4) // 2
                    n1v = wd[4 : 4 + dim]
                    n2v = wd[4 + dim : 4 + 2 * dim]
                n1n2 = n1 * n2 - (n1v * n2v).sum(axis=0)
                if self.version is FMTVersion.WHITE_BEAR:
                    n2n2 = n2 * n2 - 3.0 * (n2v * n2v).sum(axis=0)
                else:
                    xi2 = (n2v * n2v).sum(axis=0) / n2**2
                    xi2 = np.where(xi2 > 1.0, 1.0, xi2)
                    n2n2 = n2 * n2 * (1.0 - xi2) ** 3
            else:
                n1n2 = n1 * n2
                n2n2 = n2 * n2

            ln31 = np.log1p(-n3)
            n3m1 = 1.0 - n3
            f3 = (n3m1 * n3m1 * ln31 + n3) / (n3 * n3 * n3m1 * n3m1)
            taylor = (((n3 * 35.0 / 6.0 + 4.8) * n3 + 3.75) * n3 + 8.0 / 3.0) * n3 + 1.5
            f3 = np.where(n3 < N3_CUTOFF, taylor, f3)
            return -(n0 * ln31) + n1n2 / n3m1 + n2n2 * n2 * PI36M1 * f3

    def __str__(self) -> str:
        return f"FMT functional ({self.version.value})"


class FMTFunctional:
    """Helmholtz energy functional of a hard-sphere mixture."""

    def __init__(self, sigma, version=FMTVersion.WHITE_BEAR):
        self.version = FMTVersion(version)
        self.properties = HardSphereProperties(sigma)
        self.contributions = [FMTContribution(self.properties, self.version)]
        n = len(self.properties.sigma)
        self.component_index = np.arange(n)
        self.ideal_chain_contribution = IdealChainContribution(self.component_index, np.ones(n))

    def subset(self, component_list) -> "FMTFunctional":
        """Functional for the selected components only."""
        indices = [int(c) for c in component_list]
        return FMTFunctional(self.properties.sigma[indices], self.version)

    def compute_max_density(self, moles) -> float:
        """Estimate of a liquid-like density for the given composition."""
        moles = np.atleast_1d(np.asarray(moles, dtype=float))
        return float(moles.sum() / (moles * self.properties.sigma).sum() * 1.2)

    def pair_potential(self, r) -> np.ndarray:
        """Hard-sphere pair potential, shape ``(components, len(r))``."""
        r = np.atleast_1d(np.asarray(r, dtype=float))
        return np.where(r[np.newaxis, :] > self.properties.sigma[:, np.newaxis], 0.0, np.inf)

    def epsilon_k_ff(self) -> np.ndarray:
        return np.zeros(len(self.properties.sigma))

    def sigma_ff(self) -> np.ndarray:
        return self.properties.sigma.copy()

    def m(self) -> np.ndarray:
        return np.ones(len(self.properties.sigma))