"""All-pairs shortest-path closure of the distance graph (Floyd-Warshall)."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from .progress import ProgressReporter, report


def compute_shortest_distance_matrix(
    distance_graph: np.ndarray,
    progress: Optional[ProgressReporter] = None,
) -> np.ndarray:
    """Return the shortest-path closure of ``distance_graph``.

    The input is left untouched. The intermediate node ``k`` advances strictly
    in order; within one step every cell is relaxed against row ``k`` and
    column ``k``, which that step cannot change because the diagonal is zero.
    Relaxing the working buffer in place is only valid under that ordering,
    so the ``k`` loop must never be split across workers. Entries stay ``inf``
    for pairs in different connected components.
    """

    graph = np.asarray(distance_graph, dtype=float)
    if graph.ndim != 2 or graph.shape[0] != graph.shape[1]:
        raise ValueError(f"Distance graph must be square, got shape {graph.shape}.")

    dist = graph.copy()
    n = dist.shape[0]
    for k in range(n):
        np.minimum(dist, dist[:, k, np.newaxis] + dist[np.newaxis, k, :], out=dist)
        report(progress, "Computing shortest distance matrix", k + 1, n)

    logging.info("Computed shortest distance matrix for %d trajectories", n)
    return dist
