"""Synchronised distance between spatio-temporal trajectories.

This package synchronises trajectories onto a shared timestamp grid, builds a
direct distance graph gated by temporal overlap, closes it under all-pairs
shortest paths, and prunes trajectories that cannot reach the largest
connected component. :class:`SynchronisedDistance` exposes the result as a
precomputed distance measure for trajectory clustering.
"""

from .config import MeasureConfig, load_config, measure_config_from_dict
from .errors import (
    DegenerateTrajectoryError,
    DisconnectedPairError,
    DuplicateTrajectoryError,
    SynchronisedDistanceError,
    UnknownTrajectoryError,
)
from .measure import DistanceMeasure, IndexMap, SynchronisedDistance
from .model import Dataset, Position, Trajectory
from .progress import LoggingProgress, ProgressReporter

__all__ = [
    "Dataset",
    "DegenerateTrajectoryError",
    "DisconnectedPairError",
    "DistanceMeasure",
    "DuplicateTrajectoryError",
    "IndexMap",
    "LoggingProgress",
    "MeasureConfig",
    "Position",
    "ProgressReporter",
    "SynchronisedDistance",
    "SynchronisedDistanceError",
    "Trajectory",
    "UnknownTrajectoryError",
    "load_config",
    "measure_config_from_dict",
]
