"""One-dimensional Fourier transforms for cartesian, spherical and polar axes.

All transforms act along the last axis of their input.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np
from scipy import fft as sfft
from scipy.special import jv

from .geometry import Axis, AxisGeometry


def _dct2(x: np.ndarray) -> np.ndarray:
    return sfft.dct(x, type=2, axis=-1) / 2.0


def _dct3(x: np.ndarray) -> np.ndarray:
    return sfft.dct(x, type=3, axis=-1) / 2.0


def _dst2(x: np.ndarray) -> np.ndarray:
    return sfft.dst(x, type=2, axis=-1) / 2.0


def _dst3(x: np.ndarray) -> np.ndarray:
    return sfft.dst(x, type=3, axis=-1) / 2.0


def _as_profile(values, length: int, name: str) -> np.ndarray:
    array = np.asarray(values, dtype=float)
    if array.ndim == 0 or array.shape[-1] != length:
        raise ValueError(f"{name} must have {length} entries along its last axis")
    return array


class FourierTransform(ABC):
    """A forward and backward transform between real and Fourier space."""

    k_grid: np.ndarray

    @abstractmethod
    def forward_transform(self, f_r, scalar=True) -> np.ndarray:
        """Transform a real-space profile into Fourier space."""

    @abstractmethod
    def back_transform(self, f_k, scalar=True) -> np.ndarray:
        """Transform a Fourier-space profile back into real space."""


class CartesianTransform(FourierTransform):
    """Cosine (scalar) and sine (vector) transforms on an equidistant axis."""

    def __init__(self, axis: Axis):
        self.points = len(axis.grid)
        self.k_grid = math.pi * np.arange(self.points + 1) / axis.length()

    def forward_transform(self, f_r, scalar=True) -> np.ndarray:
        f_r = _as_profile(f_r, self.points, "f_r")
        f_k = np.zeros(f_r.shape[:-1] + (self.points + 1,))
        if scalar:
            f_k[..., :-1] = _dct2(f_r)
        else:
            f_k[..., 1:] = _dst2(f_r)
        return f_k

    def back_transform(self, f_k, scalar=True) -> np.ndarray:
        f_k = _as_profile(f_k, self.points + 1, "f_k")
        scale = 0.5 * self.points
        if scalar:
            return _dct3(f_k[..., :-1]) / scale
        return _dst3(f_k[..., 1:]) / scale


class SphericalTransform(FourierTransform):
    """Radial transform for spherically symmetric profiles."""

    def __init__(self, axis: Axis):
        self.points = len(axis.grid)
        self.r_grid = np.array(axis.grid, dtype=float)
        self.k_grid = math.pi * np.arange(self.points + 1) / axis.length()

    def forward_transform(self, f_r, scalar=True) -> np.ndarray:
        f_r = _as_profile(f_r, self.points, "f_r")
        k = self.k_grid[1:]
        f_k = np.zeros(f_r.shape[:-1] + (self.points + 1,))
        if scalar:
            f_k[..., 1:] = _dst2(f_r * self.r_grid) / k
        else:
            cosine = np.zeros_like(f_k)
            cosine[..., :-1] = _dct2(f_r * self.r_grid)
            f_k[..., 1:] = (cosine[..., 1:] - _dst2(f_r) / k) / k
        return f_k

    def back_transform(self, f_k, scalar=True) -> np.ndarray:
        f_k = _as_profile(f_k, self.points + 1, "f_k")
        scale = 0.5 * self.points
        weighted = f_k * self.k_grid
        if scalar:
            f_r = _dst3(weighted[..., 1:]) / scale
        else:
            f_r = (
                _dct3(weighted[..., :-1]) / scale
                - _dst3(f_k[..., 1:]) / scale / self.r_grid
            )
        return f_r / self.r_grid


class PolarTransform(FourierTransform):
    """Logarithmic Hankel transform for axially symmetric profiles."""

    def __init__(self, axis: Axis):
        points = len(axis.grid)
        if points < 2:
            raise ValueError("a polar transform needs at least 2 grid points")
        self.points = points

        alpha = 0.002
        for _ in range(20):
            alpha = -math.log(1.0 - math.exp(-alpha)) / (points - 1)
        x0 = 0.5 * (math.exp(-alpha * points) + math.exp(-alpha * (points - 1)))
        gamma = math.exp(alpha * (points - 1))
        length = axis.length()

        self.alpha = alpha
        self.gamma = gamma
        self.length = length
        self.r_grid = np.array(axis.grid, dtype=float)
        self.k_grid = x0 * np.exp(alpha * np.arange(points)) * gamma / length

        e2a = math.exp(2.0 * alpha)
        denominator = (1.0 + math.exp(alpha)) ** 2 * (e2a - 1.0)
        self.k0 = (
            e2a * (2.0 * math.exp(alpha) + e2a - 1.0) / denominator,
            e2a * (2.0 * math.exp(alpha) + e2a - 5.0 / 3.0) / denominator,
        )

        argument = gamma * x0 * np.exp(alpha * (np.arange(1, 2 * points + 1) - points))
        self.j = (np.fft.ifft(jv(1.0, argument)), np.fft.ifft(jv(2.0, argument)))

    def _transform(self, f_in, scalar, x_in, x_out, factor) -> np.ndarray:
        n = self.points
        f_in = _as_profile(f_in, n, "profile")
        if scalar:
            alpha, k0, j = self.alpha, self.k0[0], self.j[0]
        else:
            factor *= factor
            f_in = f_in / x_in
            alpha, k0, j = 2.0 * self.alpha, self.k0[1], self.j[1]

        phi = np.zeros(f_in.shape[:-1] + (2 * n,))
        decay = np.exp(-alpha * np.arange(n - 1, 0, -1))
        phi[..., : n - 1] = (f_in[..., :-1] - f_in[..., 1:]) * decay
        phi[..., 0] *= k0
        spectrum = np.fft.fft(np.fft.fft(phi, axis=-1) * j, axis=-1)
        return spectrum[..., :n].real * factor / x_out

    def forward_transform(self, f_r, scalar=True) -> np.ndarray:
        return self._transform(f_r, scalar, self.r_grid, self.k_grid, self.length)

    def back_transform(self, f_k, scalar=True) -> np.ndarray:
        return self._transform(
            f_k, scalar, self.k_grid, self.r_grid, self.gamma / self.length
        )


class NoTransform(FourierTransform):
    """Identity transform for a degenerate (single point) dimension."""

    def __init__(self):
        self.k_grid = np.array([0.0])

    def forward_transform(self, f_r, scalar=True) -> np.ndarray:
        return np.array(f_r, dtype=float)

    def back_transform(self, f_k, scalar=True) -> np.ndarray:
        return np.array(f_k, dtype=float)


def transform_for_axis(axis) -> FourierTransform:
    """The transform matching the geometry of ``axis``; ``None`` gives the identity."""
    if axis is None:
        return NoTransform()
    if axis.geometry is AxisGeometry.CARTESIAN:
        return CartesianTransform(axis)
    if axis.geometry is AxisGeometry.POLAR:
        return PolarTransform(axis)
    return SphericalTransform(axis)