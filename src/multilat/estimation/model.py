from __future__ import annotations

from typing import Protocol, Sequence

import numpy as np

from multilat.estimation.types import Measurement


class LeastSquaresModel(Protocol):
    """Residual vector r(x) and its Jacobian, as consumed by the LM solver."""

    def residuals(self, x: np.ndarray) -> np.ndarray:
        ...

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        ...


class MultilaterationModel:
    """
    Squared-distance residuals for range measurements to known anchors.

      r_i(x) = ||x - a_i||^2 - d_i^2
      J[i, j] = 2 (x_j - a_i[j])

    Measurements must already be validated (common dimension D >= 1).
    """

    def __init__(self, measurements: Sequence[Measurement]) -> None:
        self.anchors = np.array([m.anchor.coordinates for m in measurements], dtype=float)  # (N,D)
        self.distances = np.array([m.distance for m in measurements], dtype=float)      # (N,)

    @property
    def dimension(self) -> int:
        return int(self.anchors.shape[1])

    def initial_guess(self) -> np.ndarray:
        """Centroid of the anchors."""
        return self.anchors.mean(axis=0)

    def residuals(self, x: np.ndarray) -> np.ndarray:
        diff = x[None, :] - self.anchors      # (N,D)
        return np.sum(diff * diff, axis=1) - self.distances ** 2

    def jacobian(self, x: np.ndarray) -> np.ndarray:
        return 2.0 * (x[None, :] - self.anchors)
