"""Bookkeeping for provisional outputs produced during a size search."""

from __future__ import annotations

import dataclasses
import logging
import math
from pathlib import Path

from .params import CompressionParams

LOGGER = logging.getLogger("batchpdf.compress.search")


@dataclasses.dataclass(slots=True)
class Candidate:
    """A materialized provisional output and the parameters that produced it."""

    path: Path
    size: int
    params: CompressionParams

    def delta(self, target: int) -> int:
        return abs(self.size - target)

    def discard(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as exc:
            LOGGER.warning("Could not delete candidate %s: %s", self.path, exc)


class CandidateSelector:
    """Keep the candidate closest to ``target`` and delete every other one.

    At most one candidate file is alive while the selector is in use. Used as
    a context manager, the held candidate is deleted on exit unless the
    caller claimed it with :meth:`take`.
    """

    def __init__(self, target: int) -> None:
        self.target = target
        self._best: Candidate | None = None
        self._best_delta: float = math.inf

    def __enter__(self) -> "CandidateSelector":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.discard()

    @property
    def best(self) -> Candidate | None:
        return self._best

    @property
    def best_delta(self) -> float:
        return self._best_delta

    def consider(self, candidate: Candidate) -> bool:
        """Hold ``candidate`` if it is strictly closer than the current best.

        Returns ``True`` when ``candidate`` became the best. The loser of the
        comparison is deleted before this method returns.
        """

        delta = candidate.delta(self.target)
        if delta < self._best_delta:
            previous = self._best
            self._best = candidate
            self._best_delta = delta
            if previous is not None:
                previous.discard()
            return True
        candidate.discard()
        return False

    def take(self) -> Candidate | None:
        """Hand the best candidate to the caller, who becomes its owner."""

        best = self._best
        self._best = None
        self._best_delta = math.inf
        return best

    def discard(self) -> None:
        if self._best is not None:
            self._best.discard()
        self._best = None
        self._best_delta = math.inf
