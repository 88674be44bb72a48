"""Trajectory containers consumed by the distance engine.

A :class:`Trajectory` is an identifier plus a set of time-stamped 2D positions;
a :class:`Dataset` is an ordered, removable collection of trajectories. Both
support copy-construction so the engine can work on clones it owns while the
caller keeps the originals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterable, Iterator, List, Tuple


@dataclass(frozen=True)
class Position:
    """A planar position."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))


@dataclass
class Trajectory:
    """Time-stamped positions recorded for one moving entity.

    ``samples`` maps integer timestamps to positions. Timestamps are unique
    within a trajectory; :meth:`timestamps` always returns them in ascending
    order regardless of insertion order.
    """

    id: Hashable
    samples: Dict[int, Position] = field(default_factory=dict)

    @classmethod
    def from_points(cls, trajectory_id: Hashable, points: Iterable[Tuple[int, float, float]]) -> "Trajectory":
        """Build a trajectory from ``(timestamp, x, y)`` tuples."""

        trajectory = cls(trajectory_id)
        for t, x, y in points:
            trajectory.add(t, Position(x, y))
        return trajectory

    def __len__(self) -> int:
        return len(self.samples)

    def timestamps(self) -> List[int]:
        return sorted(self.samples)

    def position_at(self, t: int) -> Position:
        """Return the position at ``t``; raises ``KeyError`` if absent."""

        return self.samples[t]

    def add(self, t: int, position: Position) -> None:
        """Insert a sample, rejecting timestamps that are already present."""

        t = int(t)
        if t in self.samples:
            raise ValueError(f"Trajectory {self.id!r} already has a sample at t={t}.")
        self.samples[t] = position

    def first_timestamp(self) -> int:
        return min(self.samples)

    def last_timestamp(self) -> int:
        return max(self.samples)

    def span(self) -> int:
        """Duration between the first and last recorded timestamp."""

        if not self.samples:
            return 0
        return self.last_timestamp() - self.first_timestamp()

    def copy(self) -> "Trajectory":
        # Positions are immutable, so a new mapping is enough.
        return Trajectory(self.id, dict(self.samples))


@dataclass
class Dataset:
    """Ordered, removable collection of trajectories."""

    trajectories: List[Trajectory] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trajectories)

    def __iter__(self) -> Iterator[Trajectory]:
        return iter(self.trajectories)

    def size(self) -> int:
        return len(self.trajectories)

    def add(self, trajectory: Trajectory) -> None:
        self.trajectories.append(trajectory)

    def remove(self, trajectory: Trajectory) -> None:
        """Remove ``trajectory`` (matched by identity, then by id)."""

        for pos, candidate in enumerate(self.trajectories):
            if candidate is trajectory:
                del self.trajectories[pos]
                return
        for pos, candidate in enumerate(self.trajectories):
            if candidate.id == trajectory.id:
                del self.trajectories[pos]
                return
        raise ValueError(f"Trajectory {trajectory.id!r} is not part of this dataset.")

    def ids(self) -> List[Hashable]:
        return [trajectory.id for trajectory in self.trajectories]

    def copy(self) -> "Dataset":
        """Copy-construct a dataset whose trajectories are independent clones."""

        return Dataset([trajectory.copy() for trajectory in self.trajectories])
