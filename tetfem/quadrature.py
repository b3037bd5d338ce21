"""Quadrature rules on the reference tetrahedron."""

from __future__ import annotations

import math

import numpy as np


class QuadratureRule:
    """Points and weights for integrating over the reference tetrahedron.

    The reference tetrahedron has vertices (0,0,0), (1,0,0), (0,1,0) and
    (0,0,1), so the weights of every rule sum to its volume, 1/6.
    Order 1 is the one-point centroid rule. Every other order gives the
    symmetric four-point rule.
    """

    def __init__(self, order: int = 1) -> None:
        self.order = order
        if order == 1:
            self._points = np.array([[0.25, 0.25, 0.25]])
            self._weights = np.array([1.0 / 6.0])
        else:
            a = (5.0 - math.sqrt(5.0)) / 20.0
            b = (5.0 + 3.0 * math.sqrt(5.0)) / 20.0
            self._points = np.array(
                [
                    [a, a, a],
                    [b, a, a],
                    [a, b, a],
                    [a, a, b],
                ]
            )
            self._weights = np.full(4, 1.0 / 24.0)

    def points_and_weights(self) -> tuple[np.ndarray, np.ndarray]:
        """Return copies of the points, shape (n, 3), and weights, shape (n,)."""
        return self._points.copy(), self._weights.copy()

    def __len__(self) -> int:
        return len(self._weights)