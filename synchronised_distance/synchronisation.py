"""Temporal synchronisation of trajectories.

Every trajectory receives an interpolated sample at each timestamp that some
other trajectory recorded strictly inside its own span, so that trajectories
overlapping in time can be compared sample by sample. Positions are linearly
interpolated between the nearest recorded samples before and after the
missing timestamp.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .errors import DegenerateTrajectoryError
from .model import Position, Trajectory
from .progress import ProgressReporter, report


def validate_trajectory(trajectory: Trajectory) -> None:
    """Raise :class:`DegenerateTrajectoryError` for unusable trajectories."""

    if len(trajectory) < 2:
        raise DegenerateTrajectoryError(trajectory.id, f"{len(trajectory)} sample(s), at least 2 required")
    if trajectory.span() <= 0:
        raise DegenerateTrajectoryError(trajectory.id, "zero time span")
    coords = np.array([(p.x, p.y) for p in trajectory.samples.values()], dtype=float)
    if not np.all(np.isfinite(coords)):
        raise DegenerateTrajectoryError(trajectory.id, "non-finite coordinates")


def collect_timestamps(trajectories: Iterable[Trajectory]) -> np.ndarray:
    """Return the sorted distinct timestamps recorded across all trajectories."""

    stamps: set[int] = set()
    for trajectory in trajectories:
        stamps.update(trajectory.samples)
    return np.array(sorted(stamps), dtype=np.int64)


def interpolate_missing(trajectory: Trajectory, grid: np.ndarray) -> int:
    """Insert interpolated samples for grid timestamps inside the trajectory span.

    Timestamps equal to the first or last recorded timestamp are never
    interpolated. Expects a trajectory that passed :func:`validate_trajectory`.
    Returns the number of inserted samples.
    """

    own_t = np.array(trajectory.timestamps(), dtype=np.int64)
    inside = grid[(grid > own_t[0]) & (grid < own_t[-1])]
    missing = inside[~np.isin(inside, own_t)]
    if missing.size == 0:
        return 0

    own_x = np.array([trajectory.samples[t].x for t in own_t], dtype=float)
    own_y = np.array([trajectory.samples[t].y for t in own_t], dtype=float)
    # np.interp brackets each target between its nearest earlier and later sample.
    xs = np.interp(missing, own_t, own_x)
    ys = np.interp(missing, own_t, own_y)

    for t, x, y in zip(missing.tolist(), xs.tolist(), ys.tolist()):
        trajectory.add(t, Position(x, y))
    return int(missing.size)


def synchronise_trajectories(
    trajectories: Sequence[Trajectory],
    progress: Optional[ProgressReporter] = None,
) -> int:
    """Synchronise ``trajectories`` in place onto their shared timestamp grid.

    Every trajectory is validated before any of them is mutated, so a
    degenerate input leaves the collection untouched. Returns the total number
    of interpolated samples.
    """

    for trajectory in trajectories:
        validate_trajectory(trajectory)

    grid = collect_timestamps(trajectories)
    total = len(trajectories)
    inserted: List[int] = []
    for done, trajectory in enumerate(trajectories, start=1):
        inserted.append(interpolate_missing(trajectory, grid))
        report(progress, "Synchronising trajectories", done, total)

    n_inserted = int(sum(inserted))
    logging.info(
        "Synchronised %d trajectories on %d timestamps (%d samples interpolated)",
        total,
        len(grid),
        n_inserted,
    )
    return n_inserted
