"""Exceptions raised by the synchronised distance engine."""

from __future__ import annotations

from typing import Hashable


class SynchronisedDistanceError(Exception):
    """Base class for every error raised by this package."""


class DegenerateTrajectoryError(SynchronisedDistanceError):
    """A trajectory has fewer than two samples or a zero time span."""

    def __init__(self, trajectory_id: Hashable, reason: str) -> None:
        super().__init__(f"Trajectory {trajectory_id!r} is degenerate: {reason}")
        self.trajectory_id = trajectory_id
        self.reason = reason


class UnknownTrajectoryError(SynchronisedDistanceError, KeyError):
    """The identifier was never indexed, or was withdrawn by pruning."""

    def __init__(self, trajectory_id: Hashable) -> None:
        super().__init__(f"Trajectory {trajectory_id!r} is not part of the distance index.")
        self.trajectory_id = trajectory_id

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class DisconnectedPairError(SynchronisedDistanceError):
    """Two indexed trajectories have no finite path between them."""

    def __init__(self, first_id: Hashable, second_id: Hashable) -> None:
        super().__init__(f"Trajectories {first_id!r} and {second_id!r} are not connected.")
        self.first_id = first_id
        self.second_id = second_id


class DuplicateTrajectoryError(SynchronisedDistanceError, ValueError):
    """The same identifier appears more than once across the input datasets."""

    def __init__(self, trajectory_id: Hashable) -> None:
        super().__init__(f"Trajectory id {trajectory_id!r} appears more than once.")
        self.trajectory_id = trajectory_id
