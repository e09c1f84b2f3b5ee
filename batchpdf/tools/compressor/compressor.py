"""Compression engine for :mod:`batchpdf`."""

from __future__ import annotations

import dataclasses
import logging
import shutil
from pathlib import Path
from typing import Literal

from ...core.codec import DocumentHandle
from ...core.estimator import DocumentSizeEstimator
from ...core.utils import base_name, sizeof_fmt
from .candidates import Candidate
from .exceptions import NoCandidateError
from .params import LOW_PRESET, CompressionParams, SearchBounds
from .raster import apply_params
from .search import CandidateFactory, TargetSizeSearch

_LOGGER = logging.getLogger("batchpdf.compress")

Strategy = Literal["preset", "target", "fallback"]


def output_name(path: Path) -> str:
    return f"{base_name(path)}_compressed.pdf"


@dataclasses.dataclass(slots=True)
class CompressionResult:
    """Represents the outcome of compressing one document."""

    input_path: Path
    output_path: Path
    original_size: int
    compressed_size: int
    params: CompressionParams
    strategy: Strategy
    iterations: int = 0

    @property
    def bytes_saved(self) -> int:
        return max(self.original_size - self.compressed_size, 0)

    @property
    def compression_ratio(self) -> float:
        if self.original_size == 0:
            return 1.0
        return self.compressed_size / self.original_size


def _original_size(handle: DocumentHandle) -> int:
    try:
        return handle.path.stat().st_size
    except OSError:
        return 0


def compress_with_params(
    handle: DocumentHandle,
    params: CompressionParams,
    destination: Path,
    *,
    estimator: DocumentSizeEstimator | None = None,
    strategy: Strategy = "preset",
) -> CompressionResult:
    """Re-encode every eligible image of ``handle`` once and write ``destination``."""

    estimator = estimator or DocumentSizeEstimator()
    writer = handle.clone()
    stats = apply_params(writer, params)
    estimator.materialize(writer, destination)
    result = CompressionResult(
        input_path=handle.path,
        output_path=destination,
        original_size=_original_size(handle),
        compressed_size=destination.stat().st_size,
        params=params,
        strategy=strategy,
    )
    _LOGGER.info(
        "Compressed: %s -> %s (%s, %d image(s) re-encoded, %s)",
        handle.path.name,
        destination.name,
        sizeof_fmt(result.compressed_size),
        stats.replaced,
        params,
    )
    return result


def candidate_factory(
    handle: DocumentHandle,
    directory: Path,
    estimator: DocumentSizeEstimator,
) -> CandidateFactory:
    """Return a callable producing one on-disk candidate per parameter set.

    Each call works on a fresh clone of the source so passes never compound.
    """

    prefix = f"{base_name(handle.path)}_cand_"

    def produce(params: CompressionParams) -> Candidate:
        writer = handle.clone()
        stats = apply_params(writer, params)
        if stats.replaced == 0:
            raise NoCandidateError(
                f"{handle.path.name}: no raster content responded to compression"
            )
        path = estimator.materialize_temp(writer, directory, prefix)
        candidate = Candidate(path=path, size=path.stat().st_size, params=params)
        _LOGGER.debug("Candidate written: %s with %s", sizeof_fmt(candidate.size), params)
        return candidate

    return produce


def _persist(candidate: Candidate, destination: Path) -> None:
    try:
        candidate.path.replace(destination)
    except OSError:
        shutil.copyfile(candidate.path, destination)
        candidate.discard()


def compress_to_target(
    handle: DocumentHandle,
    target: int,
    destination: Path,
    *,
    bounds: SearchBounds | None = None,
    estimator: DocumentSizeEstimator | None = None,
) -> CompressionResult:
    """Write the output of ``handle`` whose size lands closest to ``target`` bytes.

    Candidates are created next to ``destination``. When the search produces
    nothing (for example a document without compressible images) a single
    low-preset pass is written instead, so the call still yields an output.
    """

    estimator = estimator or DocumentSizeEstimator()
    search = TargetSizeSearch(
        target,
        candidate_factory(handle, destination.parent, estimator),
        bounds,
    )
    best = search.run()
    if best is None:
        _LOGGER.info("No valid candidate produced; falling back to LOW preset compression")
        result = compress_with_params(
            handle, LOW_PRESET, destination, estimator=estimator, strategy="fallback"
        )
        result.iterations = search.iterations
        return result

    try:
        _persist(best, destination)
    except OSError:
        best.discard()
        raise
    result = CompressionResult(
        input_path=handle.path,
        output_path=destination,
        original_size=_original_size(handle),
        compressed_size=destination.stat().st_size,
        params=best.params,
        strategy="target",
        iterations=search.iterations,
    )
    _LOGGER.info(
        "Final output: %s -> %s (%s)",
        handle.path.name,
        destination.name,
        sizeof_fmt(result.compressed_size),
    )
    return result
