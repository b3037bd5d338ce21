"""Linear Lagrange basis functions on tetrahedra."""

from __future__ import annotations

import numpy as np

from tetfem.grid import Grid

_REFERENCE_GRADIENTS = np.array(
    [
        [-1.0, -1.0, -1.0],
        [1.0, 0.0, 0.0],
        [0.0, 1.0, 0.0],
        [0.0, 0.0, 1.0],
    ]
)


class Basis:
    """The four linear shape functions of the reference tetrahedron."""

    def eval_phi(self, xhat: np.ndarray) -> np.ndarray:
        """Values at the points ``xhat``, shape (len(xhat), 4)."""
        xhat = np.atleast_2d(np.asarray(xhat, dtype=float))
        return np.column_stack([1.0 - xhat.sum(axis=1), xhat[:, 0], xhat[:, 1], xhat[:, 2]])

    def eval_grad_phi(self, xhat: np.ndarray) -> np.ndarray:
        """Gradients, shape (4 * len(xhat), 3); row ``4*k + j`` is function j at point k."""
        n = len(np.atleast_2d(xhat))
        return np.tile(_REFERENCE_GRADIENTS, (n, 1))


class GlobalBasis:
    """Global hat functions, one per grid point."""

    def __init__(self, grid: Grid, basis: Basis) -> None:
        self.grid = grid
        self.basis = basis

    def eval_phi(self, xhat: np.ndarray, global_ind: int) -> np.ndarray:
        """Values of hat function ``global_ind`` at ``xhat`` in each supporting cell.

        Entry ``c*len(xhat) + k`` is the value at point k in the c-th cell of
        the support.
        """
        _, local_ind = self.dof_map(global_ind)
        val_hat = self.basis.eval_phi(xhat)
        if not local_ind:
            return np.zeros(0)
        return val_hat[:, local_ind].T.ravel()

    def dof_map(self, global_ind: int) -> tuple[list[int], list[int]]:
        """Cells containing point ``global_ind`` and its local index in each."""
        cells_idx, local_idx = np.nonzero(self.grid.cells == global_ind)
        return cells_idx.tolist(), local_idx.tolist()

    def shared_dof_map(
        self, global_ind_i: int, global_ind_j: int
    ) -> tuple[list[int], list[int], list[int]]:
        """Cells containing both points, with their local indices in each."""
        supp_i, local_i = self.dof_map(global_ind_i)
        supp_j, local_j = self.dof_map(global_ind_j)
        where_j = dict(zip(supp_j, local_j))
        shared = [(t, li, where_j[t]) for t, li in zip(supp_i, local_i) if t in where_j]
        if not shared:
            return [], [], []
        cells, loc_i, loc_j = zip(*shared)
        return list(cells), list(loc_i), list(loc_j)