"""Target-size compression search.

The search walks two windows, JPEG quality and image scale, with a bounded
binary search. Quality moves first; scale only moves once the quality window
has narrowed below :data:`QUALITY_CONVERGENCE`, because downscaling is the
more visible degradation. Each pass produces a :class:`Candidate` on disk and
a :class:`CandidateSelector` keeps only the closest one alive.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Callable

from ...exceptions import SerializationError
from .candidates import Candidate, CandidateSelector
from .exceptions import NoCandidateError
from .params import LOW_PRESET, SEED_PARAMS, CompressionParams, SearchBounds

LOGGER = logging.getLogger("batchpdf.compress.search")

QUALITY_CONVERGENCE = 0.03
MIN_TOLERANCE_BYTES = 10_000
TOLERANCE_RATIO = 0.08
FALLBACK_RATIO = 0.10

CandidateFactory = Callable[[CompressionParams], Candidate]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def tolerance(target: int) -> int:
    """Absolute deviation from ``target`` that ends the search early."""

    return max(MIN_TOLERANCE_BYTES, _round_half_up(target * TOLERANCE_RATIO))


def fallback_threshold(target: int) -> int:
    """Deviation above which the low preset is tried as a last comparison."""

    return max(MIN_TOLERANCE_BYTES, _round_half_up(target * FALLBACK_RATIO))


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(value, high))


@dataclasses.dataclass(slots=True)
class SearchState:
    """Mutable windows and current parameters of one search."""

    quality_low: float
    quality_high: float
    scale_low: float
    scale_high: float
    quality: float
    scale: float
    iteration: int = 0

    @classmethod
    def start(cls, bounds: SearchBounds, seed: CompressionParams = SEED_PARAMS) -> "SearchState":
        return cls(
            quality_low=bounds.quality_min,
            quality_high=bounds.quality_max,
            scale_low=bounds.scale_min,
            scale_high=bounds.scale_max,
            quality=_clamp(seed.quality, bounds.quality_min, bounds.quality_max),
            scale=_clamp(seed.scale, bounds.scale_min, bounds.scale_max),
        )

    @property
    def params(self) -> CompressionParams:
        return CompressionParams(self.quality, self.scale)

    @property
    def quality_converged(self) -> bool:
        return (self.quality_high - self.quality_low) < QUALITY_CONVERGENCE

    def advance(self, size: int, target: int) -> None:
        """Narrow the windows after observing ``size`` for the current params."""

        if size > target:
            self.quality_high = self.quality
            self.quality = (self.quality_low + self.quality_high) / 2
            LOGGER.info(
                " size>target -> lower quality: %.3f (bounds [%.3f, %.3f])",
                self.quality,
                self.quality_low,
                self.quality_high,
            )
            if self.quality_converged:
                self.scale_high = self.scale
                self.scale = (self.scale_low + self.scale_high) / 2
                LOGGER.info(
                    " quality converged -> reduce scale: %.2f (bounds [%.2f, %.2f])",
                    self.scale,
                    self.scale_low,
                    self.scale_high,
                )
        else:
            self.quality_low = self.quality
            self.quality = (self.quality_low + self.quality_high) / 2
            LOGGER.info(
                " size<target -> raise quality: %.3f (bounds [%.3f, %.3f])",
                self.quality,
                self.quality_low,
                self.quality_high,
            )
            if self.quality_converged:
                self.scale_low = self.scale
                self.scale = min(1.0, (self.scale_low + self.scale_high) / 2)
                LOGGER.info(
                    " quality converged -> increase scale: %.2f (bounds [%.2f, %.2f])",
                    self.scale,
                    self.scale_low,
                    self.scale_high,
                )


class TargetSizeSearch:
    """Search compression parameters whose output lands closest to ``target``.

    ``produce`` materializes one candidate for the given parameters. It may
    raise :class:`NoCandidateError` when nothing in the document responds to
    compression, or :class:`SerializationError` when the candidate cannot be
    written; both end the search.
    """

    def __init__(
        self,
        target: int,
        produce: CandidateFactory,
        bounds: SearchBounds | None = None,
    ) -> None:
        if target <= 0:
            raise ValueError("Target size must be a positive number of bytes")
        self.target = target
        self.bounds = bounds or SearchBounds()
        self._produce = produce
        self.iterations = 0

    def run(self) -> Candidate | None:
        """Return the winning candidate, or ``None`` if none was produced.

        The caller owns the returned candidate's file. Every other candidate
        has been deleted by the time this method returns or raises.
        """

        target = self.target
        tol = tolerance(target)
        state = SearchState.start(self.bounds)
        LOGGER.info("Target-size mode: %d bytes (%d KB)", target, target // 1024)
        LOGGER.info(
            "Search bounds: quality=[%.3f, %.3f] scale=[%.2f, %.2f], max_iterations=%d",
            self.bounds.quality_min,
            self.bounds.quality_max,
            self.bounds.scale_min,
            self.bounds.scale_max,
            self.bounds.max_iterations,
        )

        with CandidateSelector(target) as selector:
            for iteration in range(1, self.bounds.max_iterations + 1):
                state.iteration = iteration
                self.iterations = iteration
                params = state.params
                LOGGER.info(
                    "Iter %d/%d: trying %s", iteration, self.bounds.max_iterations, params
                )
                candidate = self._attempt(params)
                if candidate is None:
                    break

                size = candidate.size
                delta = candidate.delta(target)
                LOGGER.info(" -> result size: %d KB (delta=%d KB)", size // 1024, delta // 1024)
                if selector.consider(candidate):
                    LOGGER.info(" -> new best candidate")
                else:
                    LOGGER.info(" -> worse than best; discarded")

                if size == target or delta <= tol:
                    LOGGER.info("Stopping early: within tolerance (%d KB)", tol // 1024)
                    break
                state.advance(size, target)

            if selector.best is None:
                LOGGER.info("No candidate produced by the search")
                return None

            if selector.best_delta > fallback_threshold(target):
                self._compare_with_preset(selector)

            best = selector.take()

        LOGGER.info(
            "Best candidate: %d KB with %s (delta=%d KB)",
            best.size // 1024,
            best.params,
            best.delta(target) // 1024,
        )
        return best

    def _attempt(self, params: CompressionParams) -> Candidate | None:
        try:
            return self._produce(params)
        except NoCandidateError as exc:
            LOGGER.info("Search stopped: %s", exc)
        except SerializationError as exc:
            LOGGER.warning("Search stopped, candidate could not be written: %s", exc)
        return None

    def _compare_with_preset(self, selector: CandidateSelector) -> None:
        LOGGER.info("Creating LOW preset candidate for comparison...")
        low = self._attempt(LOW_PRESET)
        if low is None:
            return
        LOGGER.info(
            "LOW candidate: %d KB (delta=%d KB)", low.size // 1024, low.delta(self.target) // 1024
        )
        if selector.consider(low):
            LOGGER.info("LOW candidate selected as better match to target")
        else:
            LOGGER.info("Original best candidate retained")
