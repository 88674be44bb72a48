"""Configuration helpers for the synchronised distance measure.

Provides YAML loading, nested lookups with defaults, and the typed
:class:`MeasureConfig` read from the ``measure`` section.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

UNREACHABLE_POLICIES = ("raise", "inf")


def load_config(path: str | Path) -> Dict[str, Any]:
    """Load a YAML configuration file whose top level must be a mapping."""

    cfg = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must contain a mapping, got {type(cfg).__name__}.")
    return cfg


def get_nested(config: Dict[str, Any], dotted_key: str, default: Any) -> Any:
    """Look up ``"section.key"`` in a config dict; missing or empty sections yield ``default``."""

    node: Any = config
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node


@dataclass
class MeasureConfig:
    """Runtime options for :class:`~synchronised_distance.measure.SynchronisedDistance`."""

    n_jobs: int = 1
    on_unreachable: str = "raise"
    log_every: int | None = None

    def __post_init__(self) -> None:
        self.on_unreachable = str(self.on_unreachable).lower()
        if self.on_unreachable not in UNREACHABLE_POLICIES:
            raise ValueError(
                f"Unsupported on_unreachable policy: {self.on_unreachable} (expected one of {UNREACHABLE_POLICIES})"
            )
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero (use -1 for all cores).")
        if self.log_every is not None and self.log_every <= 0:
            raise ValueError("log_every must be positive or None.")


def measure_config_from_dict(cfg: Dict[str, Any]) -> MeasureConfig:
    """Build a :class:`MeasureConfig` from the ``measure`` section of a config dict."""

    measure_cfg = cfg.get("measure", {}) or {}
    log_every = measure_cfg.get("log_every")
    return MeasureConfig(
        n_jobs=int(measure_cfg.get("n_jobs", 1)),
        on_unreachable=str(measure_cfg.get("on_unreachable", "raise")),
        log_every=int(log_every) if log_every is not None else None,
    )
