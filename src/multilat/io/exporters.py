from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd


@dataclass(frozen=True)
class RunPaths:
    run_dir: Path
    summary_csv: Path
    per_trial_csv: Path


def make_run_paths(base_dir: str | Path = "outputs/runs", label: Optional[str] = None) -> RunPaths:
    """
    Create a fresh run directory named by timestamp (plus optional label),
    e.g. outputs/runs/2026-01-16_01-23-45_noise-sweep
    """
    name = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    if label:
        name = f"{name}_{label}"
    run_dir = Path(base_dir) / name
    run_dir.mkdir(parents=True, exist_ok=False)

    return RunPaths(
        run_dir=run_dir,
        summary_csv=run_dir / "summary.csv",
        per_trial_csv=run_dir / "per_trial.csv",
    )


def export_run(
    paths: RunPaths,
    summary_rows: list[Dict[str, Any]],
    per_trial_rows: list[Dict[str, Any]],
) -> None:
    """Write one summary row per condition and one row per trial."""
    pd.DataFrame(summary_rows).to_csv(paths.summary_csv, index=False)
    pd.DataFrame(per_trial_rows).to_csv(paths.per_trial_csv, index=False)
