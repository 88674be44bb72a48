"""CLI entry point for the synchronised distance measure.

Loads a long table of trajectory samples, builds the synchronised distance
measure, optionally prunes unreachable trajectories, and writes the
shortest-distance matrix (and optionally the raw distance graph) as CSV.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd

from synchronised_distance.config import get_nested, load_config, measure_config_from_dict
from synchronised_distance.frames import dataset_from_frame, matrix_to_frame, save_dataframe
from synchronised_distance.measure import SynchronisedDistance
from synchronised_distance.model import Dataset


def configure_logging(log_cfg: Dict[str, object]) -> Path:
    """Route root logging to a run log file, plus the console unless ``console: false``."""

    log_path = Path(str(log_cfg.get("dir", "logs"))) / str(log_cfg.get("filename", "synchronised_distance.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    level = logging.getLevelName(str(log_cfg.get("level", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    handlers: List[logging.Handler] = [logging.FileHandler(log_path, mode="w", encoding="utf-8")]
    if log_cfg.get("console", True):
        handlers.append(logging.StreamHandler())
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    logging.info("Logging to %s (level=%s)", log_path, logging.getLevelName(level))
    return log_path


def _split_datasets(df: pd.DataFrame, dataset_col: str | None, columns: Dict[str, str]) -> List[Dataset]:
    """One Dataset per value of ``dataset_col``, or a single Dataset when unset."""

    if not dataset_col:
        return [dataset_from_frame(df, **columns)]
    if dataset_col not in df.columns:
        raise ValueError(f"Missing dataset column: {dataset_col}")
    return [dataset_from_frame(part, **columns) for _, part in df.groupby(dataset_col, sort=False)]


def main(config_path: str = "config/synchronised_distance.yaml") -> Path:
    cfg = load_config(config_path)

    configure_logging(cfg.get("logging", {}) or {})

    input_cfg = cfg.get("input", {}) or {}
    csv_path = input_cfg.get("csv", "data/trajectories.csv")
    columns = {
        "id_col": get_nested(cfg, "input.columns.id", "trajectory_id"),
        "time_col": get_nested(cfg, "input.columns.timestamp", "timestamp"),
        "x_col": get_nested(cfg, "input.columns.x", "x"),
        "y_col": get_nested(cfg, "input.columns.y", "y"),
    }
    df = pd.read_csv(csv_path)
    logging.info("Read %d rows from %s", len(df), csv_path)
    datasets = _split_datasets(df, input_cfg.get("dataset_column"), columns)

    measure = SynchronisedDistance(config=measure_config_from_dict(cfg))
    measure.create_support_data(datasets)

    if get_nested(cfg, "pruning.enabled", True):
        for dataset in datasets:
            measure.remove_impossible_trajectories_from_dataset(dataset)

    retained = [trajectory.id for dataset in datasets for trajectory in dataset]
    rows = [measure.index[trajectory_id] for trajectory_id in retained]
    shortest = measure.shortest_distance_matrix[np.ix_(rows, rows)]

    output_cfg = cfg.get("output", {}) or {}
    output_dir = Path(output_cfg.get("dir", "output"))
    exp_name = str(output_cfg.get("experiment_name", "synchronised_distance"))
    matrix_path = output_dir / f"shortest_distance_{exp_name}.csv"
    save_dataframe(matrix_to_frame(shortest, retained), matrix_path, index=True)

    if output_cfg.get("save_distance_graph", False):
        all_ids = measure.index.ids
        save_dataframe(
            matrix_to_frame(measure.distance_graph, all_ids),
            output_dir / f"distance_graph_{exp_name}.csv",
            index=True,
        )
    return matrix_path


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Synchronised trajectory distance matrix.")
    parser.add_argument(
        "-c",
        "--config",
        default="config/synchronised_distance.yaml",
        help="Path to YAML config file.",
    )
    args = parser.parse_args()
    main(args.config)
