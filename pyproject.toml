[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dftkit"
version = "0.1.0"
description = "Building blocks for classical density functional theory: grids, Fourier transforms, external potentials and hard-sphere functionals."
requires-python = ">=3.10"
keywords = [
    "density functional theory",
    "fundamental measure theory",
    "adsorption",
    "external potential",
    "hankel transform",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Chemistry",
]
dependencies = [
    "numpy",
    "scipy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["dftkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
