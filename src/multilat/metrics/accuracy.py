from __future__ import annotations

from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class AccuracyMetrics:
    rmse_m: float
    mae_m: float
    p95_m: float


def compute_position_errors(true_pos: np.ndarray, est_pos: np.ndarray) -> np.ndarray:
    """
    true_pos: (T,D) or (D,)
    est_pos:  (T,D)
    returns:  Euclidean errors (T,)
    """
    e = np.atleast_2d(est_pos) - np.atleast_2d(true_pos)
    return np.linalg.norm(e, axis=1)


def summarize_errors(errors: np.ndarray) -> AccuracyMetrics:
    if errors.size == 0:
        nan = float("nan")
        return AccuracyMetrics(rmse_m=nan, mae_m=nan, p95_m=nan)
    rmse = float(np.sqrt(np.mean(errors**2)))
    mae = float(np.mean(np.abs(errors)))
    p95 = float(np.percentile(errors, 95))
    return AccuracyMetrics(rmse_m=rmse, mae_m=mae, p95_m=p95)
