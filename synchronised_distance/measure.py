"""Synchronised trajectory distance measure.

Two-phase contract: :meth:`SynchronisedDistance.create_support_data` performs
the expensive setup once (clone, synchronise, index, build the distance graph,
close it under shortest paths), after which
:meth:`SynchronisedDistance.compute_distance` is a constant-time lookup.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Hashable, Iterable, Iterator, List, Optional, Protocol, Sequence

import numpy as np

from .config import MeasureConfig
from .connectivity import prune_dataset
from .errors import DisconnectedPairError, DuplicateTrajectoryError, UnknownTrajectoryError
from .graph import build_distance_graph
from .model import Dataset, Trajectory
from .progress import LoggingProgress, ProgressReporter
from .shortest_path import compute_shortest_distance_matrix
from .synchronisation import synchronise_trajectories


class DistanceMeasure(Protocol):
    def create_support_data(self, datasets: Sequence[Dataset]) -> None:
        ...

    def remove_impossible_trajectories_from_dataset(self, dataset: Dataset) -> None:
        ...

    def compute_distance(self, a: Trajectory, b: Trajectory) -> float:
        ...


class IndexMap:
    """Bijection between trajectory ids and matrix rows ``0..n-1``.

    Ids can be withdrawn (after pruning) without renumbering the remaining
    rows, so matrices computed at setup stay valid for every live id.
    """

    def __init__(self, ids: Iterable[Hashable]) -> None:
        self._ids: List[Hashable] = []
        self._rows: Dict[Hashable, int] = {}
        for trajectory_id in ids:
            if trajectory_id in self._rows:
                raise DuplicateTrajectoryError(trajectory_id)
            self._rows[trajectory_id] = len(self._ids)
            self._ids.append(trajectory_id)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, trajectory_id: object) -> bool:
        return trajectory_id in self._rows

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._rows)

    def __getitem__(self, trajectory_id: Hashable) -> int:
        try:
            return self._rows[trajectory_id]
        except KeyError:
            raise UnknownTrajectoryError(trajectory_id) from None

    def id_at(self, row: int) -> Hashable:
        """Reverse lookup; withdrawn ids still resolve to their original row."""

        return self._ids[row]

    @property
    def ids(self) -> List[Hashable]:
        """All ids assigned at setup, in row order."""

        return list(self._ids)

    def withdraw(self, trajectory_id: Hashable) -> None:
        self._rows.pop(trajectory_id, None)


class SynchronisedDistance:
    """Distance measure over temporally synchronised trajectories."""

    def __init__(
        self,
        config: Optional[MeasureConfig] = None,
        progress: Optional[ProgressReporter] = None,
    ) -> None:
        self.config: MeasureConfig = config or MeasureConfig()
        if progress is None and self.config.log_every:
            progress = LoggingProgress(self.config.log_every)
        self.progress = progress
        self.logger: logging.Logger = logging.getLogger(self.__class__.__name__)

        self._index: Optional[IndexMap] = None
        self._distance_graph: Optional[np.ndarray] = None
        self._shortest: Optional[np.ndarray] = None

    @property
    def is_ready(self) -> bool:
        return self._shortest is not None

    @property
    def index(self) -> IndexMap:
        self._require_ready()
        return self._index

    @property
    def distance_graph(self) -> np.ndarray:
        self._require_ready()
        return self._distance_graph.copy()

    @property
    def shortest_distance_matrix(self) -> np.ndarray:
        self._require_ready()
        return self._shortest.copy()

    def _require_ready(self) -> None:
        if self._shortest is None:
            raise RuntimeError("create_support_data() must be called before querying the measure.")

    def create_support_data(self, datasets: Sequence[Dataset]) -> None:
        """Clone the datasets and precompute every pairwise distance.

        Internal state is replaced only once all stages succeed; on failure the
        measure keeps whatever it held before the call.
        """

        copies = [dataset.copy() for dataset in datasets]
        trajectories: List[Trajectory] = [trajectory for dataset in copies for trajectory in dataset]
        self.logger.info("Copied %d datasets (%d trajectories)", len(copies), len(trajectories))

        index = IndexMap(trajectory.id for trajectory in trajectories)

        synchronise_trajectories(trajectories, progress=self.progress)
        graph = build_distance_graph(trajectories, index, n_jobs=self.config.n_jobs, progress=self.progress)
        shortest = compute_shortest_distance_matrix(graph, progress=self.progress)

        self._index = index
        self._distance_graph = graph
        self._shortest = shortest

    def remove_impossible_trajectories_from_dataset(self, dataset: Dataset) -> None:
        """Drop trajectories outside the largest connected component from ``dataset``.

        Removed ids are withdrawn from the index, so querying them afterwards
        raises :class:`UnknownTrajectoryError`; retained ids keep their rows.
        """

        self._require_ready()
        removed = prune_dataset(dataset, self._index, self._distance_graph, progress=self.progress)
        for trajectory_id in removed:
            self._index.withdraw(trajectory_id)
        self.logger.info("Dataset now holds %d trajectories", dataset.size())

    def compute_distance(self, a: Trajectory, b: Trajectory) -> float:
        self._require_ready()
        d = float(self._shortest[self._index[a.id], self._index[b.id]])
        if math.isinf(d) and self.config.on_unreachable == "raise":
            raise DisconnectedPairError(a.id, b.id)
        return d
