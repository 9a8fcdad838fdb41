"""Discretised axes and grids in up to three dimensions.

All lengths are reduced (dimensionless) floats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np


class AxisGeometry(Enum):
    """Geometry of an individual axis."""

    CARTESIAN = "cartesian"
    POLAR = "polar"
    SPHERICAL = "spherical"

    def dimension(self) -> int:
        """Number of spatial dimensions the axis spans."""
        return _DIMENSIONS[self]


_DIMENSIONS = {
    AxisGeometry.CARTESIAN: 1,
    AxisGeometry.POLAR: 2,
    AxisGeometry.SPHERICAL: 3,
}

_VOLUME_PREFACTORS = {
    AxisGeometry.CARTESIAN: 1.0,
    AxisGeometry.POLAR: 4.0 * math.pi,
    AxisGeometry.SPHERICAL: 4.0 * math.pi / 3.0,
}


def _require_points(points: int, minimum: int) -> int:
    points = int(points)
    if points < minimum:
        raise ValueError(f"an axis needs at least {minimum} grid point(s), got {points}")
    return points


@dataclass(eq=False)
class Axis:
    """A single discretised axis."""

    geometry: AxisGeometry
    grid: np.ndarray
    edges: np.ndarray
    integration_weights: np.ndarray
    potential_offset: float = 0.0

    @classmethod
    def new_cartesian(cls, points, length, potential_offset=None) -> "Axis":
        """Equidistant cartesian axis.

        The potential offset extends the axis so that particles cannot
        interact through walls.
        """
        points = _require_points(points, 1)
        offset = 0.0 if potential_offset is None else float(potential_offset)
        total = float(length) + offset
        cell_size = total / points
        return cls(
            geometry=AxisGeometry.CARTESIAN,
            grid=np.linspace(0.5 * cell_size, total - 0.5 * cell_size, points),
            edges=np.linspace(0.0, total, points + 1),
            integration_weights=np.full(points, cell_size),
            potential_offset=offset,
        )

    @classmethod
    def new_spherical(cls, points, length) -> "Axis":
        """Equidistant spherical (radial) axis."""
        points = _require_points(points, 1)
        total = float(length)
        cell_size = total / points
        k = np.arange(points, dtype=float)
        weights = 4.0 * math.pi / 3.0 * cell_size**3 * (3.0 * k * k + 3.0 * k + 1.0)
        return cls(
            geometry=AxisGeometry.SPHERICAL,
            grid=np.linspace(0.5 * cell_size, total - 0.5 * cell_size, points),
            edges=np.linspace(0.0, total, points + 1),
            integration_weights=weights,
        )

    @classmethod
    def new_polar(cls, points, length) -> "Axis":
        """Logarithmically scaled cylindrical (radial) axis."""
        points = _require_points(points, 2)
        total = float(length)

        alpha = 0.002
        for _ in range(20):
            alpha = -math.log(1.0 - math.exp(-alpha)) / (points - 1)
        x0 = 0.5 * (math.exp(-alpha * points) + math.exp(-alpha * (points - 1)))

        i = np.arange(points, dtype=float)
        grid = total * x0 * np.exp(alpha * i)

        edges = np.empty(points + 1)
        edges[0] = 0.0
        edges[1:] = total * np.exp(-alpha * (points - np.arange(1, points + 1)))

        e2a = math.exp(2.0 * alpha)
        k0 = e2a * (2.0 * math.exp(alpha) + e2a - 1.0) / (
            (1.0 + math.exp(alpha)) ** 2 * (e2a - 1.0)
        )
        weights = np.exp(2.0 * alpha * i) * (e2a - 1.0)
        weights[0] = k0 * e2a
        if points > 1:
            weights[1] = (e2a - k0) * e2a
        weights *= math.exp(-2.0 * alpha * points) * math.pi * total * total

        return cls(
            geometry=AxisGeometry.POLAR,
            grid=grid,
            edges=edges,
            integration_weights=weights,
        )

    def length(self) -> float:
        """Total length of the axis, including the potential offset."""
        return float(self.edges[len(self.grid)] - self.edges[0])

    def volume(self) -> float:
        """Volume (length, area or volume) of the axis without the potential offset."""
        length = self.edges[len(self.grid)] - self.potential_offset - self.edges[0]
        return float(_VOLUME_PREFACTORS[self.geometry] * length ** self.geometry.dimension())

    def interpolate(self, x, y, i) -> float:
        """Value of row ``i`` of ``y`` in the grid cell that contains ``x``."""
        y = np.asarray(y)
        n = len(self.grid)
        x = float(x)
        if x >= self.edges[n]:
            index = n - 1
        elif self.geometry is AxisGeometry.POLAR:
            if x < self.edges[1]:
                index = 0
            else:
                index = int(
                    n
                    - (n - 1)
                    * math.log(x / self.edges[n])
                    / math.log(self.edges[1] / self.edges[n])
                )
        else:
            index = int(x / self.edges[1])
        return float(y[i, max(index, 0)])


class GridType(Enum):
    """Kinds of grids and the number of axes each one holds."""

    CARTESIAN1 = 1
    CARTESIAN2 = 2
    PERIODICAL2 = 3
    CARTESIAN3 = 4
    PERIODICAL3 = 5
    SPHERICAL = 6
    POLAR = 7
    CYLINDRICAL = 8

    @property
    def axis_count(self) -> int:
        return _AXIS_COUNTS[self]


_AXIS_COUNTS = {
    GridType.CARTESIAN1: 1,
    GridType.CARTESIAN2: 2,
    GridType.PERIODICAL2: 2,
    GridType.CARTESIAN3: 3,
    GridType.PERIODICAL3: 3,
    GridType.SPHERICAL: 1,
    GridType.POLAR: 1,
    GridType.CYLINDRICAL: 2,
}

_ONE_D_GRIDS = {
    AxisGeometry.CARTESIAN: GridType.CARTESIAN1,
    AxisGeometry.POLAR: GridType.POLAR,
    AxisGeometry.SPHERICAL: GridType.SPHERICAL,
}


@dataclass(eq=False)
class Grid:
    """A grid of up to three axes; a cylindrical grid holds (r, z)."""

    kind: GridType
    axes: tuple

    def __post_init__(self) -> None:
        self.axes = tuple(self.axes)
        if len(self.axes) != self.kind.axis_count:
            raise ValueError(
                f"{self.kind.name} grid needs {self.kind.axis_count} axes, got {len(self.axes)}"
            )

    @classmethod
    def new_1d(cls, axis) -> "Grid":
        """One-dimensional grid matching the geometry of ``axis``."""
        return cls(_ONE_D_GRIDS[axis.geometry], (axis,))

    def grids(self) -> list:
        """Grid points of every axis."""
        return [axis.grid for axis in self.axes]

    def integration_weights(self) -> list:
        """Integration weights of every axis."""
        return [axis.integration_weights for axis in self.axes]