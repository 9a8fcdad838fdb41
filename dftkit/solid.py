"""External potentials generated by explicit solid atoms in a periodic box.

Solid structures are given as atom coordinates of shape ``(3, n_atoms)``.
All quantities are reduced (dimensionless) floats.
"""

from __future__ import annotations

import numpy as np
from numpy.polynomial.legendre import leggauss

from .geometry import AxisGeometry


def lj_potential(distance2, sigma, epsilon, cutoff_radius2):
    """Lennard-Jones 12-6 potential from squared distances.

    Distances beyond the cut-off give zero; a distance of exactly zero
    gives infinity. Accepts scalars or arrays (broadcast together).
    """
    d2 = np.asarray(distance2, dtype=float)
    sigma = np.asarray(sigma, dtype=float)
    epsilon = np.asarray(epsilon, dtype=float)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        sigma_r = sigma**2 / d2
        lj = 4.0 * epsilon * (sigma_r**6 - sigma_r**3)
    result = np.where(d2 > cutoff_radius2, 0.0, np.where(d2 == 0.0, np.inf, lj))
    if result.ndim == 0:
        return float(result)
    return result


def _round_half_away(x: np.ndarray) -> np.ndarray:
    return np.copysign(np.floor(np.abs(x) + 0.5), x)


def _validate_coordinates(coordinates) -> np.ndarray:
    coords = np.asarray(coordinates, dtype=float)
    if coords.ndim != 2 or coords.shape[0] != 3:
        raise ValueError("coordinates must have shape (3, n_atoms)")
    return coords


def _validate_box(system_size) -> np.ndarray:
    size = np.asarray(system_size, dtype=float)
    if size.shape != (3,):
        raise ValueError("system_size must hold exactly three lengths")
    return size


def _site_parameters(values, atoms: int, name: str) -> np.ndarray:
    array = np.atleast_1d(np.asarray(values, dtype=float))
    if array.shape != (atoms,):
        raise ValueError(f"{name} must hold one value per solid atom ({atoms})")
    return array


def _distance2_many(points: np.ndarray, coords: np.ndarray, size: np.ndarray) -> np.ndarray:
    """Minimum-image squared distances; points (..., 3) -> (..., n_atoms)."""
    diff = coords - points[..., :, np.newaxis]
    box = size[:, np.newaxis]
    diff = diff - box * _round_half_away(diff / box)
    return (diff**2).sum(axis=-2)


def periodic_distance2(point, coordinates, system_size) -> np.ndarray:
    """Squared minimum-image distances from ``point`` to every solid atom."""
    point = np.asarray(point, dtype=float)
    if point.shape != (3,):
        raise ValueError("point must hold exactly three coordinates")
    coords = _validate_coordinates(coordinates)
    size = _validate_box(system_size)
    return _distance2_many(point, coords, size)


def _equidistant(length: float, n: int) -> tuple[np.ndarray, np.ndarray]:
    cell = length / n
    nodes = np.linspace(0.5 * cell, length - 0.5 * cell, n)
    return nodes, np.full(n, cell)


def calculate_fea_potential(
    grid,
    mi,
    coordinates,
    sigma_sf,
    epsilon_k_sf,
    pore_center,
    system_size,
    n_grid,
    temperature,
    geometry,
    cutoff_radius,
    max_potential,
) -> np.ndarray:
    """Free-energy averaged potential of a solid structure along ``grid``.

    For cartesian axes the average runs over y and z, for polar axes over
    the angle and z, and for spherical axes over both angles around
    ``pore_center``.
    """
    grid = np.atleast_1d(np.asarray(grid, dtype=float))
    coords = _validate_coordinates(coordinates)
    size = _validate_box(system_size)
    atoms = coords.shape[1]
    sigma_sf = _site_parameters(sigma_sf, atoms, "sigma_sf")
    epsilon_k_sf = _site_parameters(epsilon_k_sf, atoms, "epsilon_k_sf")
    center = np.asarray(pore_center, dtype=float)
    if center.shape != (3,):
        raise ValueError("pore_center must hold exactly three coordinates")
    n1, n2 = (int(n) for n in n_grid)
    if n1 < 1 or n2 < 1:
        raise ValueError("n_grid must hold two positive integers")
    geometry = AxisGeometry(geometry)
    temperature = float(temperature)
    mi = float(mi)
    cutoff_radius2 = float(cutoff_radius) ** 2
    max_potential = float(max_potential)

    # secondary axis: y (cartesian) or the azimuthal angle (polar, spherical)
    if geometry is AxisGeometry.CARTESIAN:
        nodes1, weights1 = _equidistant(size[1], n1)
    else:
        x, w = leggauss(n1)
        nodes1, weights1 = np.pi + x * np.pi, w * np.pi

    # tertiary axis: z (cartesian, polar) or the polar angle (spherical)
    if geometry is AxisGeometry.SPHERICAL:
        x, w = leggauss(n2)
        nodes2 = 0.5 * np.pi + x * 0.5 * np.pi
        weights2 = w * 0.5 * np.pi * np.sin(nodes2)
    else:
        nodes2, weights2 = _equidistant(size[2], n2)

    weights = np.outer(weights1, weights2)
    weights_sum = weights.sum()
    a, b = np.meshgrid(nodes1, nodes2, indexing="ij")

    potential = np.empty(len(grid))
    for index, r in enumerate(grid):
        if geometry is AxisGeometry.CARTESIAN:
            components = (np.full_like(a, r), a, b)
        elif geometry is AxisGeometry.POLAR:
            components = (center[0] + r * np.cos(a), center[1] + r * np.sin(a), b)
        else:
            components = (
                center[0] + r * np.sin(b) * np.cos(a),
                center[1] + r * np.sin(b) * np.sin(a),
                center[2] + r * np.cos(b),
            )
        points = np.stack(components, axis=-1)
        d2 = _distance2_many(points, coords, size)
        with np.errstate(invalid="ignore"):
            site = mi * lj_potential(d2, sigma_sf, epsilon_k_sf, cutoff_radius2) / temperature
            reduced = site.sum(axis=-1)
        boltzmann = np.exp(-np.fmin(reduced, max_potential))
        potential[index] = (boltzmann * weights).sum()

    return -temperature * np.log(potential / weights_sum)


def external_potential_3d(
    fluid,
    axes,
    system_size,
    coordinates,
    sigma_ss,
    epsilon_k_ss,
    cutoff_radius,
    potential_cutoff,
    temperature,
) -> np.ndarray:
    """Reduced external potential of a solid on a periodic 3D grid.

    ``fluid`` supplies ``m()``, ``sigma_ff()`` and ``epsilon_k_ff()``.
    The result has shape ``(components, nx, ny, nz)`` and is capped at
    ``potential_cutoff``.
    """
    if len(axes) != 3:
        raise ValueError("exactly three axes are required")
    coords = _validate_coordinates(coordinates)
    size = _validate_box(system_size)
    atoms = coords.shape[1]
    sigma_ss = _site_parameters(sigma_ss, atoms, "sigma_ss")
    epsilon_k_ss = _site_parameters(epsilon_k_ss, atoms, "epsilon_k_ss")
    m = np.atleast_1d(np.asarray(fluid.m(), dtype=float))
    sigma_ff = np.atleast_1d(np.asarray(fluid.sigma_ff(), dtype=float))
    epsilon_k_ff = np.atleast_1d(np.asarray(fluid.epsilon_k_ff(), dtype=float))
    cutoff_radius2 = float(cutoff_radius) ** 2
    potential_cutoff = float(potential_cutoff)
    temperature = float(temperature)

    gx, gy, gz = (np.asarray(axis.grid, dtype=float) for axis in axes)
    yy, zz = np.meshgrid(gy, gz, indexing="ij")
    result = np.empty((len(m), len(gx), len(gy), len(gz)))

    for ix, x in enumerate(gx):
        points = np.stack((np.full_like(yy, x), yy, zz), axis=-1)
        d2 = _distance2_many(points, coords, size)
        for i, mi in enumerate(m):
            sigma_sf = (sigma_ss + sigma_ff[i]) / 2.0
            epsilon_sf = np.sqrt(epsilon_k_ss * epsilon_k_ff[i])
            with np.errstate(invalid="ignore"):
                site = mi * lj_potential(d2, sigma_sf, epsilon_sf, cutoff_radius2)
                result[i, ix] = site.sum(axis=-1) / temperature

    return np.where(result > potential_cutoff, potential_cutoff, result)