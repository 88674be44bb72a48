"""Progress reporting hooks for the long-running stages."""

from __future__ import annotations

import logging
from typing import Optional, Protocol


class ProgressReporter(Protocol):
    def __call__(self, stage: str, done: int, total: int) -> None:
        ...


class LoggingProgress:
    """Log progress through :mod:`logging` every ``log_every`` steps."""

    def __init__(self, log_every: int = 100, level: int = logging.INFO) -> None:
        if log_every <= 0:
            raise ValueError("log_every must be a positive integer.")
        self.log_every = log_every
        self.level = level
        self.logger = logging.getLogger(self.__class__.__name__)

    def __call__(self, stage: str, done: int, total: int) -> None:
        if done % self.log_every == 0 or done == total:
            pct = 100.0 * done / total if total else 100.0
            self.logger.log(self.level, "%s: %d/%d (%.0f%%)", stage, done, total, pct)


def report(progress: Optional[ProgressReporter], stage: str, done: int, total: int) -> None:
    """Forward to ``progress`` when one was supplied."""

    if progress is not None:
        progress(stage, done, total)
