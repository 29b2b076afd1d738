from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

import yaml

from multilat.estimation.levenberg_marquardt import SolverConfig


def load_yaml_config(path: str | Path) -> Dict[str, Any]:
    """
    Load YAML config file and return as dict.
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError("Invalid config: root must be a mapping (dict).")

    return data


def solver_config_from_dict(cfg: Dict[str, Any]) -> SolverConfig:
    """
    Build a SolverConfig from the optional `solver` section of a config dict.
    Missing keys keep their defaults.
    """
    section = cfg.get("solver") or {}
    if not isinstance(section, dict):
        raise ValueError("Invalid config: 'solver' must be a mapping.")

    known = {f.name for f in fields(SolverConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"Invalid config: unknown solver keys {unknown}")

    kwargs: Dict[str, Any] = {}
    for key, value in section.items():
        kwargs[key] = int(value) if key == "max_iterations" else float(value)
    return SolverConfig(**kwargs)


def load_solver_config(path: str | Path) -> SolverConfig:
    return solver_config_from_dict(load_yaml_config(path))
