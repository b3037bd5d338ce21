"""Structured tetrahedral grid on an axis-aligned box."""

from __future__ import annotations

from typing import Callable

import numpy as np

_BOUNDARY_EPS = 1e-6

# Local vertex numbering of a hexahedron split into six tetrahedra.
# Corner (i, j, k) offsets are indexed as i + 2*j + 4*k.
_HEX_SPLIT = (
    (0b000, 0b001, 0b010, 0b100),
    (0b001, 0b011, 0b010, 0b101),
    (0b010, 0b011, 0b110, 0b101),
    (0b100, 0b101, 0b010, 0b110),
    (0b001, 0b101, 0b011, 0b111),
    (0b011, 0b101, 0b110, 0b111),
)


def _linspace(low: float, high: float, n: int) -> np.ndarray:
    if n == 1:
        return np.array([float(high)])
    return np.linspace(low, high, n)


class Grid:
    """A box split into hexahedra, each divided into six tetrahedra.

    Point ``i + j*nx + k*nx*ny`` lies at the i-th x, j-th y and k-th z
    coordinate. ``cells`` holds four point indices per tetrahedron,
    ``adet`` the absolute Jacobian determinants of the reference maps and
    ``inv_jac_t`` the transposed inverse Jacobians, shape (cells, 3, 3).
    """

    nodes_per_element = 4
    dimension = 3

    def __init__(
        self,
        xlow: float,
        xhigh: float,
        ylow: float,
        yhigh: float,
        zlow: float,
        zhigh: float,
        nx: int,
        ny: int,
        nz: int,
    ) -> None:
        self.xlow, self.xhigh = xlow, xhigh
        self.ylow, self.yhigh = ylow, yhigh
        self.zlow, self.zhigh = zlow, zhigh
        self.nx, self.ny, self.nz = nx, ny, nz
        self.points = self._create_points()
        self.cells = self._create_cells()
        self.adet, self.inv_jac_t = self._trafo_information()

    @property
    def divisions(self) -> tuple[int, int, int]:
        return self.nx, self.ny, self.nz

    def _create_points(self) -> np.ndarray:
        x = _linspace(self.xlow, self.xhigh, self.nx)
        y = _linspace(self.ylow, self.yhigh, self.ny)
        z = _linspace(self.zlow, self.zhigh, self.nz)
        zz, yy, xx = np.meshgrid(z, y, x, indexing="ij")
        return np.column_stack([xx.ravel(), yy.ravel(), zz.ravel()])

    def _create_cells(self) -> np.ndarray:
        nx, ny = self.nx, self.ny
        cells = []
        for k in range(self.nz - 1):
            for j in range(self.ny - 1):
                for i in range(self.nx - 1):
                    corners = [
                        (k + dk) * nx * ny + (j + dj) * nx + (i + di)
                        for dk in (0, 1)
                        for dj in (0, 1)
                        for di in (0, 1)
                    ]
                    cells.extend(
                        [corners[c] for c in tet] for tet in _HEX_SPLIT
                    )
        return np.array(cells, dtype=int).reshape(-1, 4)

    def _trafo_information(self) -> tuple[np.ndarray, np.ndarray]:
        if len(self.cells) == 0:
            return np.zeros(0), np.zeros((0, 3, 3))
        verts = self.points[self.cells]
        jac = np.stack(
            [verts[:, 1] - verts[:, 0], verts[:, 2] - verts[:, 0], verts[:, 3] - verts[:, 0]],
            axis=2,
        )
        adet = np.abs(np.linalg.det(jac))
        inv_jac_t = np.transpose(np.linalg.inv(jac), (0, 2, 1))
        return adet, inv_jac_t

    def eval_reference_map(self, xhat: np.ndarray) -> np.ndarray:
        """Map reference points into every cell.

        Returns shape (cells * len(xhat), 3); row ``T*len(xhat) + k`` is the
        image of point k in cell T.
        """
        xhat = np.atleast_2d(np.asarray(xhat, dtype=float))
        bary = np.column_stack([1.0 - xhat.sum(axis=1), xhat])
        verts = self.points[self.cells]
        mapped = np.einsum("kv,tvd->tkd", bary, verts)
        return mapped.reshape(-1, self.dimension)

    def is_boundary_point(self, p) -> bool:
        """Whether ``p`` lies on a face of the box, within a small tolerance."""
        eps = _BOUNDARY_EPS
        return bool(
            p[0] <= self.xlow + eps
            or p[0] >= self.xhigh - eps
            or p[1] <= self.ylow + eps
            or p[1] >= self.yhigh - eps
            or p[2] <= self.zlow + eps
            or p[2] >= self.zhigh - eps
        )

    def inner_indices(self) -> list[int]:
        """Indices of points not on the boundary, in ascending order."""
        return [i for i, p in enumerate(self.points) if not self.is_boundary_point(p)]

    def boundary_indices(self, locator: Callable[[np.ndarray], bool]) -> list[int]:
        """Indices of boundary points for which ``locator`` is true."""
        return [
            i
            for i, p in enumerate(self.points)
            if self.is_boundary_point(p) and locator(p)
        ]