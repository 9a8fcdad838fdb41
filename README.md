# dftkit

Numerical building blocks for classical density functional theory (DFT) of
fluids, aimed at confined systems: discretised grids, the Fourier-type
transforms used for convolutions on them, external potentials of solid walls
and pores, and hard-sphere functionals from fundamental measure theory.

All functions work with plain floats and NumPy arrays in reduced
(dimensionless) units; choose one consistent set of units for lengths,
energies and temperatures and use it throughout.

## Modules

- `dftkit.geometry`
  - `AxisGeometry` (`CARTESIAN`, `POLAR`, `SPHERICAL`), with `dimension()`.
  - `Axis` with the constructors `Axis.new_cartesian(points, length, potential_offset=None)`,
    `Axis.new_spherical(points, length)` and `Axis.new_polar(points, length)`
    (logarithmically spaced, at least two points). An axis holds `grid`,
    `edges`, `integration_weights` and `potential_offset`, and offers
    `length()` (including the offset), `volume()` (without the offset) and
    `interpolate(x, y, i)`, which returns row `i` of `y` in the cell
    containing `x`.
  - `GridType` and `Grid(kind, axes)`; `Grid.new_1d(axis)` picks the grid
    type from the axis geometry. `grids()` and `integration_weights()` list
    the per-axis arrays. A grid rejects the wrong number of axes with
    `ValueError`.
- `dftkit.transform` — transforms acting along the last array axis, each
  with `forward_transform(f_r, scalar=True)`, `back_transform(f_k, scalar=True)`
  and a `k_grid`:
  - `CartesianTransform` (cosine transform for scalar, sine transform for
    vector quantities; Fourier space has one point more than real space),
  - `SphericalTransform`,
  - `PolarTransform` (Hankel transform on the logarithmic polar grid),
  - `NoTransform` (identity),
  - `transform_for_axis(axis)` returns the matching transform, or
    `NoTransform` for `None`.
- `dftkit.solid` — explicit solid structures in a periodic box, coordinates
  of shape `(3, n_atoms)`:
  - `lj_potential(distance2, sigma, epsilon, cutoff_radius2)`: Lennard-Jones
    12-6 from squared distances (zero beyond the cut-off, infinite at zero
    distance),
  - `periodic_distance2(point, coordinates, system_size)`: minimum-image
    squared distances,
  - `calculate_fea_potential(...)`: free-energy averaged potential along a
    cartesian, polar or spherical grid,
  - `external_potential_3d(...)`: reduced potential on three periodic axes,
    shape `(components, nx, ny, nz)`, capped at `potential_cutoff`.
- `dftkit.external_potential` — wall potentials evaluated with
  `cartesian(z_grid, fluid, temperature)`, result shape
  `(components, len(z_grid))`: `HardWall`, `LJ93`, `SimpleLJ93`,
  `CustomLJ93`, `Steele`, `DoubleWell`, `FreeEnergyAveraged` and
  `CustomPotential` (returns its stored array unchanged). The `fluid`
  argument is anything with `m()`, `sigma_ff()` and `epsilon_k_ff()` methods
  (the `FluidParameters` protocol); solid-fluid parameters follow the
  Lorentz-Berthelot combining rules.
- `dftkit.pore_potential`
  - `cylindrical_potential(potential, r_grid, pore_size, fluid, temperature)`
    and `spherical_potential(...)`: the same potentials inside a cylindrical
    or spherical pore; `SimpleLJ93` and `CustomLJ93` raise `ValueError` there.
  - `external_potential_1d(pore_width, temperature, potential, fluid, axis, potential_cutoff)`:
    the potential divided by temperature on a one-dimensional pore axis. A
    cartesian axis is treated as a slit from two opposing walls at half the
    pore width; polar and spherical axes use `pore_width` as radius. Points
    outside the pore and values above `potential_cutoff` are set to
    `potential_cutoff`.
- `dftkit.ideal_chain`
  - `Contributions` (`TOTAL`, `RESIDUAL`, `IDEAL_GAS`, `RESIDUAL_P`).
  - `IdealChainContribution(component_index, m)` with
    `helmholtz_energy(partial_density, volume)` for a homogeneous state (zero
    for heterosegmented systems) and
    `helmholtz_energy_density(density, contributions)` for density profiles
    (`RESIDUAL_P` raises `ValueError`).
- `dftkit.fmt`
  - `FMTVersion` (`WHITE_BEAR`, `KIERLIK_ROSINBERG`, `ANTI_SYM_WHITE_BEAR`).
  - `HardSphereProperties(sigma)`.
  - `FMTContribution(properties, version)` with
    `helmholtz_energy_density(temperature, weighted_densities)`. Weighted
    densities lie along the first axis: for one component in the White Bear
    versions `n2, n3, n2v...`, otherwise `n0, n1, n2, n3`, followed for the
    White Bear versions by `n1v...` and `n2v...`.
  - `FMTFunctional(sigma, version)` with `subset`, `compute_max_density`,
    `pair_potential`, and the fluid parameters `m`, `sigma_ff` and
    `epsilon_k_ff` (all zero), so it can be passed wherever a fluid is
    expected.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
import numpy as np

from dftkit.external_potential import LJ93
from dftkit.fmt import FMTContribution, FMTFunctional, FMTVersion
from dftkit.geometry import Axis
from dftkit.pore_potential import external_potential_1d


class Fluid:
    def m(self):
        return np.array([1.0])

    def sigma_ff(self):
        return np.array([3.7])

    def epsilon_k_ff(self):
        return np.array([150.0])


# half of a slit pore of width 20, on 256 points
axis = Axis.new_cartesian(256, 10.0, 0.0)
wall = LJ93(sigma_ss=3.4, epsilon_k_ss=28.0, rho_s=0.114)
v_ext = external_potential_1d(20.0, 300.0, wall, Fluid(), axis, 50.0)
print(v_ext.shape)  # (1, 256)

# hard-sphere free energy density from weighted densities (n0, n1, n2, n3)
fluid = FMTFunctional([3.0, 3.5], FMTVersion.KIERLIK_ROSINBERG)
hs = fluid.contributions[0]
wd = np.array([[0.01], [0.02], [0.3], [0.2]])
print(hs.helmholtz_energy_density(300.0, wd))
```

## What the package does not do

It provides the pieces, not a solver. There is no equation of state for bulk
phases, no convolution of density profiles with weight functions, no
iteration for equilibrium density profiles, and no calculation of adsorption
isotherms, grand potentials or interfacial tensions. Potentials and transforms
are meant to be combined into such calculations by the caller.