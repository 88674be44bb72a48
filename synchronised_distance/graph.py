"""Direct (one-hop) distance graph between synchronised trajectories.

Two trajectories are directly comparable only when their time spans overlap.
The direct distance is the root mean of squared positional differences over
the shared timestamps, normalised once more by the number of shared samples
and divided by the contemporary overlap percentage, so pairs that overlap
briefly are pushed further apart. Pairs without overlap are joined by an
infinite edge.
"""

from __future__ import annotations

import logging
import math
from typing import Hashable, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed

from .errors import DegenerateTrajectoryError
from .model import Trajectory
from .progress import ProgressReporter, report


def percent_contemporary(r: Trajectory, s: Trajectory) -> float:
    """
    Percentage of each span covered by the common time interval, combined via min.

    overlap = max(0, min(r.last, s.last) - max(r.first, s.first))
    result  = 100 * min(overlap / r.span, overlap / s.span)
    """

    r_first, r_last = r.first_timestamp(), r.last_timestamp()
    s_first, s_last = s.first_timestamp(), s.last_timestamp()
    for trajectory, first, last in ((r, r_first, r_last), (s, s_first, s_last)):
        if last - first <= 0:
            raise DegenerateTrajectoryError(trajectory.id, "zero time span")

    overlap = max(min(r_last, s_last) - max(r_first, s_first), 0)
    return 100.0 * min(overlap / (r_last - r_first), overlap / (s_last - s_first))


def direct_distance(r: Trajectory, s: Trajectory, overlap_pct: float | None = None) -> float:
    """
    Distance over the timestamps present in both trajectories.

    Distance: sqrt(sum_t ||r(t) - s(t)||^2 / |C|^2) / overlap_pct
    """

    if overlap_pct is None:
        overlap_pct = percent_contemporary(r, s)
    common = sorted(set(r.samples) & set(s.samples))
    if not common or overlap_pct <= 0:
        return math.inf

    r_xy = np.array([(r.samples[t].x, r.samples[t].y) for t in common], dtype=float)
    s_xy = np.array([(s.samples[t].x, s.samples[t].y) for t in common], dtype=float)
    sq_sum = float(np.sum((r_xy - s_xy) ** 2))
    return math.sqrt(sq_sum / len(common) ** 2) / overlap_pct


def _row_distances(i: int, trajectories: Sequence[Trajectory]) -> List[Tuple[int, float]]:
    """Distances from trajectory ``i`` to every later trajectory."""

    r = trajectories[i]
    row: List[Tuple[int, float]] = []
    for j in range(i + 1, len(trajectories)):
        s = trajectories[j]
        pct = percent_contemporary(r, s)
        row.append((j, direct_distance(r, s, pct) if pct > 0 else math.inf))
    return row


def build_distance_graph(
    trajectories: Sequence[Trajectory],
    index: Mapping[Hashable, int],
    n_jobs: int = 1,
    progress: Optional[ProgressReporter] = None,
) -> np.ndarray:
    """Compute the symmetric direct-distance matrix for synchronised trajectories.

    ``index`` maps each trajectory id to its row. Rows are independent and may
    be spread over ``n_jobs`` joblib workers; every row writes a disjoint set of
    cells, so the result does not depend on ``n_jobs``.
    """

    n = len(trajectories)
    graph = np.zeros((n, n), dtype=float)
    if n == 0:
        return graph

    rows = Parallel(n_jobs=n_jobs, return_as="generator")(
        delayed(_row_distances)(i, trajectories) for i in range(n)
    )
    for i, row in enumerate(rows):
        a = index[trajectories[i].id]
        for j, d in row:
            b = index[trajectories[j].id]
            graph[a, b] = graph[b, a] = d
        report(progress, "Building distance graph", i + 1, n)

    n_edges = int(np.count_nonzero(np.isfinite(graph[np.triu_indices(n, k=1)])))
    logging.info("Built distance graph for %d trajectories (%d finite edges)", n, n_edges)
    return graph
