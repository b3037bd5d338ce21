[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tetfem"
version = "0.1.0"
description = "Linear tetrahedral finite elements for stationary reaction-diffusion problems on a box"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["finite elements", "fem", "tetrahedra", "reaction-diffusion", "pde"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
tetfem = "tetfem.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tetfem"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
