"""Connected components of the distance graph and pruning of unreachable trajectories.

Only trajectories inside one connected component have finite pairwise
distances after the shortest-path closure. Pruning keeps the largest
component and drops every other trajectory from the caller's dataset.
"""

from __future__ import annotations

import logging
from typing import Hashable, List, Mapping, Optional, Tuple

import numpy as np

from .errors import UnknownTrajectoryError
from .model import Dataset
from .progress import ProgressReporter, report

UNVISITED = -1


def connected_components(
    distance_graph: np.ndarray,
    progress: Optional[ProgressReporter] = None,
) -> Tuple[np.ndarray, List[int]]:
    """
    Label nodes by connected component using depth-first search.

    An edge exists wherever the graph entry is finite. Start nodes are taken in
    index order, so component ids follow discovery order. Returns
    (labels, sizes) where labels[i] is the component of node i and sizes[c] the
    number of nodes in component c.
    """

    graph = np.asarray(distance_graph, dtype=float)
    n = graph.shape[0]
    adjacency = np.isfinite(graph)
    labels = np.full(n, UNVISITED, dtype=int)
    sizes: List[int] = []

    for start in range(n):
        if labels[start] != UNVISITED:
            continue
        component = len(sizes)
        labels[start] = component
        size = 0
        stack = [start]
        while stack:
            v = stack.pop()
            size += 1
            neighbours = np.flatnonzero(adjacency[v] & (labels == UNVISITED))
            labels[neighbours] = component
            stack.extend(neighbours.tolist())
        sizes.append(size)
        report(progress, "Labelling connected components", int(np.count_nonzero(labels != UNVISITED)), n)

    return labels, sizes


def largest_component(sizes: List[int]) -> int:
    """Id of the largest component; ties go to the earliest discovered one."""

    if not sizes:
        raise ValueError("No components to choose from.")
    best = 0
    for component, size in enumerate(sizes):
        if size > sizes[best]:
            best = component
    return best


def prune_dataset(
    dataset: Dataset,
    index: Mapping[Hashable, int],
    distance_graph: np.ndarray,
    progress: Optional[ProgressReporter] = None,
) -> List[Hashable]:
    """Remove trajectories outside the largest connected component from ``dataset``.

    ``index`` maps trajectory ids to graph rows. Every trajectory in the dataset
    must be indexed; otherwise :class:`UnknownTrajectoryError` is raised before
    anything is removed. Returns the ids of the removed trajectories.
    """

    for trajectory in dataset:
        if trajectory.id not in index:
            raise UnknownTrajectoryError(trajectory.id)

    size_before = dataset.size()
    if size_before == 0:
        return []

    labels, sizes = connected_components(distance_graph, progress=progress)
    keep = largest_component(sizes)
    doomed = [trajectory for trajectory in dataset if labels[index[trajectory.id]] != keep]
    for trajectory in doomed:
        dataset.remove(trajectory)

    logging.info(
        "Removed %d unreachable trajectories (%d components, largest has %d)",
        len(doomed),
        len(sizes),
        sizes[keep],
    )
    return [trajectory.id for trajectory in doomed]
