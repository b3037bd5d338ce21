"""Assembly and solution of a reaction-diffusion problem with P1 elements."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional, Union

import numpy as np

from tetfem.basis import GlobalBasis
from tetfem.quadrature import QuadratureRule

Locator = Callable[[np.ndarray], bool]
PointFunction = Callable[[np.ndarray], float]


class StationaryProblem:
    """The system ``(c*M + a*K) u = F`` with Dirichlet rows replaced by identities.

    ``mass_matrix`` and ``stiffness_matrix`` are assembled once. Their rows
    belonging to Dirichlet degrees of freedom are zero. ``system_matrix`` and
    ``system_vector`` are built up by the ``assemble*`` and ``add_*`` methods.

    Without ``dirichlet_locations`` every boundary point is a Dirichlet DOF;
    without ``dirichlet_values`` the prescribed values are zero.
    """

    def __init__(
        self,
        global_basis: GlobalBasis,
        quadrature: QuadratureRule,
        dirichlet_locations: Optional[Locator] = None,
        dirichlet_values: Optional[PointFunction] = None,
    ) -> None:
        self.global_basis = global_basis
        self.grid = global_basis.grid
        self.basis = global_basis.basis
        self.quadrature = quadrature

        locator = self.grid.is_boundary_point if dirichlet_locations is None else dirichlet_locations
        self.dirichlet_dofs = self.grid.boundary_indices(locator)
        num_dofs = len(self.grid.points)
        self.all_dofs = list(range(num_dofs))
        dirichlet = set(self.dirichlet_dofs)
        self.free_dofs = [i for i in self.all_dofs if i not in dirichlet]

        self._xk_hat, self._wk_hat = quadrature.points_and_weights()
        self._xk_trafo = self.grid.eval_reference_map(self._xk_hat)
        self._phi = self.basis.eval_phi(self._xk_hat)
        self._grad_phi = self.basis.eval_grad_phi(self._xk_hat)

        self.system_matrix = np.zeros((num_dofs, num_dofs))
        self.system_vector = np.zeros(num_dofs)
        self.mass_matrix = self._assemble_mass()
        self.stiffness_matrix = self._assemble_stiffness()

        self.diffusion_coefficient = 0.0
        self.reaction_coefficient = 0.0
        self._solution: Optional[np.ndarray] = None

        if dirichlet_values is None:
            self._set_dirichlet_rows(0.0 for _ in self.dirichlet_dofs)
        else:
            self.assemble_boundary_conditions(dirichlet_values)

    @property
    def num_dofs(self) -> int:
        return len(self.all_dofs)

    @property
    def solution(self) -> Optional[np.ndarray]:
        return None if self._solution is None else self._solution.copy()

    @solution.setter
    def solution(self, vec) -> None:
        self._solution = np.array(vec, dtype=float)

    def _scatter(self, local: np.ndarray) -> np.ndarray:
        """Sum element matrices into a global matrix with Dirichlet rows zeroed."""
        cells = self.grid.cells
        full = np.zeros((self.num_dofs, self.num_dofs))
        if len(cells):
            np.add.at(full, (cells[:, :, None], cells[:, None, :]), local)
        full[self.dirichlet_dofs, :] = 0.0
        return full

    def _assemble_mass(self) -> np.ndarray:
        reference = np.einsum("k,ka,kb->ab", self._wk_hat, self._phi, self._phi)
        local = self.grid.adet[:, None, None] * reference[None, :, :]
        return self._scatter(local)

    def _assemble_stiffness(self) -> np.ndarray:
        nq = len(self._wk_hat)
        grads = self._grad_phi.reshape(nq, self.grid.nodes_per_element, self.grid.dimension)
        transformed = np.einsum("tij,kaj->tkai", self.grid.inv_jac_t, grads)
        local = np.einsum("k,tkai,tkbi->tab", self._wk_hat, transformed, transformed)
        local *= self.grid.adet[:, None, None]
        return self._scatter(local)

    def _set_dirichlet_rows(self, values: Iterable[float]) -> None:
        for dof, value in zip(self.dirichlet_dofs, values):
            self.system_matrix[dof, dof] = 1.0
            self.system_vector[dof] = value

    def assemble_boundary_conditions(self, dirichlet_values: PointFunction) -> None:
        """Put identity rows and prescribed values at the Dirichlet DOFs."""
        points = self.grid.points
        self._set_dirichlet_rows(dirichlet_values(points[dof]) for dof in self.dirichlet_dofs)

    def add_source(self, f: PointFunction) -> None:
        """Add the load vector of the function ``f`` at the free DOFs."""
        cells = self.grid.cells
        nq = len(self._wk_hat)
        values = np.array([f(x) for x in self._xk_trafo], dtype=float).reshape(len(cells), nq)
        local = self.grid.adet[:, None] * np.einsum(
            "tk,k,ka->ta", values, self._wk_hat, self._phi
        )
        contribution = np.zeros(self.num_dofs)
        if len(cells):
            np.add.at(contribution, cells, local)
        free = self.free_dofs
        self.system_vector[free] += contribution[free]

    def add_discrete_source(self, vec) -> None:
        """Add ``M @ vec`` to the system vector."""
        vec = np.asarray(vec, dtype=float)
        if vec.shape != (self.num_dofs,):
            raise ValueError(f"expected a vector of length {self.num_dofs}, got shape {vec.shape}")
        self.system_vector += self.mass_matrix @ vec

    def assemble(self) -> None:
        """Add ``c*M + a*K`` to the system matrix."""
        self.system_matrix += (
            self.reaction_coefficient * self.mass_matrix
            + self.diffusion_coefficient * self.stiffness_matrix
        )

    def reset_system_vector(self) -> None:
        self.system_vector[:] = 0.0

    def reset_system_matrix(self) -> None:
        self.system_matrix[:] = 0.0

    def solve(self) -> np.ndarray:
        """Solve the linear system and store the result as the solution."""
        try:
            result = np.linalg.solve(self.system_matrix, self.system_vector)
        except np.linalg.LinAlgError:
            result = np.linalg.lstsq(self.system_matrix, self.system_vector, rcond=None)[0]
        self._solution = result
        return result.copy()

    def show(self, path: Union[str, Path] = "solution_3d.dat") -> Path:
        """Write one ``x y z u`` line per grid point to ``path``."""
        if self._solution is None:
            raise ValueError("no solution has been computed or set")
        if len(self._solution) != len(self.grid.points):
            raise ValueError("solution length does not match the number of grid points")
        path = Path(path)
        lines = (
            f"{p[0]:g} {p[1]:g} {p[2]:g} {u:g}\n"
            for p, u in zip(self.grid.points, self._solution)
        )
        with path.open("w") as out:
            out.writelines(lines)
        return path