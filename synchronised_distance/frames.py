"""pandas adapters between point tables and the trajectory containers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Hashable, List, Sequence

import numpy as np
import pandas as pd

from .model import Dataset, Position, Trajectory


def dataset_from_frame(
    df: pd.DataFrame,
    id_col: str = "trajectory_id",
    time_col: str = "timestamp",
    x_col: str = "x",
    y_col: str = "y",
) -> Dataset:
    """
    Build a Dataset from a long table with one row per sample.
    Trajectories appear in order of first occurrence of their id; samples are
    sorted by timestamp.
    """

    required = [id_col, time_col, x_col, y_col]
    missing = [col for col in required if col not in df.columns]
    if missing:
        logging.error("Missing required columns %s. Available columns: %s", missing, sorted(map(str, df.columns)))
        raise ValueError(f"Missing required columns: {missing}")

    times = df[time_col]
    if not pd.api.types.is_numeric_dtype(times) or not np.all(np.mod(times.to_numpy(dtype=float), 1) == 0):
        logging.error("Column %s holds non-integral timestamps: %s", time_col, times.head().tolist())
        raise ValueError(f"Timestamps in column {time_col!r} must be integers.")

    duplicated = df.duplicated(subset=[id_col, time_col])
    if duplicated.any():
        first = df.loc[duplicated, [id_col, time_col]].iloc[0].tolist()
        raise ValueError(f"Duplicate sample for trajectory {first[0]!r} at timestamp {first[1]!r}.")

    trajectories: List[Trajectory] = []
    for trajectory_id, group in df.groupby(id_col, sort=False):
        group_sorted = group.sort_values(time_col)
        trajectory = Trajectory(trajectory_id)
        for t, x, y in zip(
            group_sorted[time_col].astype("int64"),
            group_sorted[x_col].astype(float),
            group_sorted[y_col].astype(float),
        ):
            trajectory.add(int(t), Position(x, y))
        trajectories.append(trajectory)

    logging.info("Loaded %d trajectories from %d rows", len(trajectories), len(df))
    return Dataset(trajectories)


def dataset_to_frame(
    dataset: Dataset,
    id_col: str = "trajectory_id",
    time_col: str = "timestamp",
    x_col: str = "x",
    y_col: str = "y",
) -> pd.DataFrame:
    """Flatten a Dataset into a long table (inverse of :func:`dataset_from_frame`)."""

    rows = [
        {id_col: trajectory.id, time_col: t, x_col: trajectory.samples[t].x, y_col: trajectory.samples[t].y}
        for trajectory in dataset
        for t in trajectory.timestamps()
    ]
    return pd.DataFrame(rows, columns=[id_col, time_col, x_col, y_col])


def matrix_to_frame(matrix: np.ndarray, ids: Sequence[Hashable]) -> pd.DataFrame:
    """Label a square matrix with trajectory ids on both axes."""

    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (len(ids), len(ids)):
        raise ValueError(f"Matrix shape {matrix.shape} does not match {len(ids)} ids.")
    return pd.DataFrame(matrix, index=list(ids), columns=list(ids))


def save_dataframe(df: pd.DataFrame, path: str | Path, index: bool = False) -> None:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=index)
    logging.info("Saved %d rows to %s", len(df), path)
