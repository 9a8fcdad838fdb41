"""Grids, Fourier transforms, external potentials and hard-sphere functionals for classical DFT."""

__version__ = "0.1.0"
__all__ = [
    "geometry",
    "transform",
    "solid",
    "external_potential",
    "pore_potential",
    "ideal_chain",
    "fmt",
]