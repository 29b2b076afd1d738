from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from multilat.estimation.levenberg_marquardt import SolverConfig
from multilat.estimation.multilateration import solve
from multilat.metrics.accuracy import compute_position_errors, summarize_errors
from multilat.simulation.measurement import simulate_measurements

logger = logging.getLogger(__name__)


def run_monte_carlo(
    true_position: Sequence[float],
    anchors: np.ndarray,     # (N,D)
    sigma_m: float,
    trials: int,
    base_seed: int,
    config: Optional[SolverConfig] = None,
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """
    Run K noisy solves of one geometry, varying seed = base_seed + k.

    Failed solves are reported per trial with their error kind and are left
    out of the error statistics.

    Returns:
      summary_dict: aggregated statistics
      per_trial_rows: one row per trial
    """
    if trials < 1:
        raise ValueError("trials must be >= 1")

    x_true = np.asarray(true_position, dtype=float)
    A = np.asarray(anchors, dtype=float)

    per_trial_rows: list[dict[str, Any]] = []
    estimates: list[np.ndarray] = []
    failures = 0

    for k in range(trials):
        seed = base_seed + k
        measurements = simulate_measurements(x_true, A, sigma_m=sigma_m, seed=seed)
        res = solve(measurements, config)

        row: dict[str, Any] = {
            "trial": k,
            "seed": seed,
            "sigma_m": float(sigma_m),
            "iterations": res.iterations,
            "final_cost": res.final_cost,
        }
        if res.ok:
            est = res.unwrap().as_array()
            estimates.append(est)
            row["error_m"] = float(compute_position_errors(x_true, est)[0])
            row["status"] = "ok"
        else:
            failures += 1
            row["error_m"] = float("nan")
            row["status"] = res.error.kind.value
            logger.warning("Trial %d (seed=%d) failed: %s", k, seed, res.error.message)
        per_trial_rows.append(row)

    errors = (
        compute_position_errors(x_true, np.array(estimates))
        if estimates
        else np.empty(0, dtype=float)
    )
    metrics = summarize_errors(errors)

    summary_dict = {
        "trials": trials,
        "base_seed": int(base_seed),
        "anchors": int(A.shape[0]),
        "dimension": int(A.shape[1]),
        "sigma_m": float(sigma_m),
        "failures": failures,
        "rmse_m": metrics.rmse_m,
        "mae_m": metrics.mae_m,
        "p95_m": metrics.p95_m,
    }
    return summary_dict, per_trial_rows
