from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from multilat.estimation.types import Measurement, Point


def simulate_measurements(
    true_position: Sequence[float],
    anchors: np.ndarray,     # (N,D)
    sigma_m: float = 0.0,
    seed: Optional[int] = None,
) -> list[Measurement]:
    """
    One measurement per anchor: true distance plus N(0, sigma_m^2) noise,
    clipped at zero. sigma_m=0 gives exact distances.
    """
    if sigma_m < 0.0:
        raise ValueError("sigma_m must be >= 0")

    x = np.asarray(true_position, dtype=float)
    A = np.asarray(anchors, dtype=float)
    true_ranges = np.linalg.norm(A - x[None, :], axis=1)  # (N,)

    rng = np.random.default_rng(seed)
    noise = rng.normal(loc=0.0, scale=sigma_m, size=true_ranges.shape) if sigma_m > 0.0 else 0.0
    measured = np.maximum(true_ranges + noise, 0.0)

    return [Measurement(Point(tuple(a)), float(d)) for a, d in zip(A.tolist(), measured)]
