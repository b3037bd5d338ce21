"""Command that runs a time-stepped 3D reaction-diffusion simulation."""

from __future__ import annotations

import argparse
import math
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

import numpy as np

from tetfem.basis import Basis, GlobalBasis
from tetfem.grid import Grid
from tetfem.problem import StationaryProblem
from tetfem.quadrature import QuadratureRule


def _on_z_faces(p: np.ndarray) -> bool:
    return abs(p[2] + 1) < 1e-6 or abs(p[2] - 1) < 1e-6


def _constant(value: float) -> Callable[[np.ndarray], float]:
    """Return a point function that takes ``value`` everywhere."""
    value = float(value)
    return lambda p: value


def run_3d(output_path: Union[str, Path] = "solution_3d.dat") -> np.ndarray:
    """Run three time steps on the unit-radius cube; return the final solution."""
    print("Running 3D simulation...")

    a = 1.0
    c = 0.2
    nx = ny = nz = 6
    steps = 3
    tau = 0.5
    boundary_value = _constant(1.0)

    grid = Grid(-1, 1, -1, 1, -1, 1, nx, ny, nz)
    global_basis = GlobalBasis(grid, Basis())
    quadrature = QuadratureRule(2)

    prob = StationaryProblem(global_basis, quadrature, _on_z_faces, boundary_value)
    prob.diffusion_coefficient = a
    prob.reaction_coefficient = c
    prob.solution = 2 - grid.points[:, 2] ** 2

    for n in range(steps):
        source = _constant(math.sin(math.pi / 2 * (n + 1) * tau))

        prob.reset_system_vector()
        prob.reset_system_matrix()
        prob.add_source(source)
        prob.assemble()
        prob.assemble_boundary_conditions(boundary_value)
        prob.solve()
        path = prob.show(output_path)
        print(f"Solution written to {path}")
        print(f"3D Time step {n + 1} completed.")

    return prob.solution


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run the 3D finite element simulation.")
    parser.add_argument(
        "-o", "--output", default="solution_3d.dat", help="file for the solution values"
    )
    args = parser.parse_args(argv)

    print("FEM Solver with 3D Support")
    print("==============================")
    run_3d(args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())