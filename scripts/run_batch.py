from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from multilat.io.config_loader import load_yaml_config, solver_config_from_dict
from multilat.io.exporters import export_run, make_run_paths
from multilat.logging_config import setup_logging
from multilat.simulation.runner import run_monte_carlo

logger = logging.getLogger("multilat.batch")


def main():
    cfg = load_yaml_config(Path("configs/default.yaml"))
    setup_logging(level=str(cfg.get("logging", {}).get("level", "INFO")))

    solver_cfg = solver_config_from_dict(cfg)
    batch = cfg["batch"]
    true_position = np.array(batch["true_position"], dtype=float)
    anchors = np.array(batch["anchors"], dtype=float)

    paths = make_run_paths(batch.get("output_dir", "outputs/runs"), label="noise-sweep")
    logger.info("Output dir: %s", paths.run_dir)

    summary_rows: list[dict] = []
    per_trial_rows: list[dict] = []

    for sigma in batch["sigmas"]:
        summary, rows = run_monte_carlo(
            true_position=true_position,
            anchors=anchors,
            sigma_m=float(sigma),
            trials=int(batch["trials"]),
            base_seed=int(batch["base_seed"]),
            config=solver_cfg,
        )
        summary_rows.append(summary)
        per_trial_rows.extend(rows)

        logger.info(
            "sigma=%.2f N=%d failures=%d rmse=%.3f p95=%.3f",
            sigma, anchors.shape[0], summary["failures"], summary["rmse_m"], summary["p95_m"],
        )

    export_run(paths, summary_rows, per_trial_rows)
    logger.info("Saved summary:   %s", paths.summary_csv)
    logger.info("Saved per-trial: %s", paths.per_trial_csv)


if __name__ == "__main__":
    main()
