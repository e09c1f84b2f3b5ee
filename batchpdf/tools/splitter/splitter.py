"""Splitting engine for :mod:`batchpdf`."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from ...core.codec import DocumentHandle
from ...core.estimator import DocumentSizeEstimator
from .chunking import PageChunk, every_page, iter_size_chunks, validate_partition
from .utils import build_output_filename, parse_custom_ranges

LOGGER = logging.getLogger("batchpdf.split")


@dataclasses.dataclass(frozen=True)
class EveryPageMode:
    """One output file per page."""


@dataclasses.dataclass(frozen=True)
class CustomRangeMode:
    """One output file per range segment, e.g. ``"1-3,5,7-8"``."""

    ranges: str = ""


@dataclasses.dataclass(frozen=True)
class SizeBasedMode:
    """Consecutive pages grouped into files of at most ``max_bytes`` each."""

    max_bytes: int


SplitMode = Union[EveryPageMode, CustomRangeMode, SizeBasedMode]


def _size_chunks(
    handle: DocumentHandle, max_bytes: int, estimator: DocumentSizeEstimator
) -> Iterator[PageChunk]:
    def measure(start: int, end: int) -> int:
        return estimator.measure(handle.slice(start, end))

    for chunk, _ in iter_size_chunks(handle.page_count, max_bytes, measure):
        yield chunk


def plan_chunks(
    handle: DocumentHandle,
    mode: SplitMode,
    estimator: DocumentSizeEstimator | None = None,
) -> Iterable[PageChunk]:
    """Return the chunks ``mode`` produces for ``handle``.

    Size-based plans are lazy so each chunk can be written as soon as it is
    decided.
    """

    total_pages = handle.page_count
    if isinstance(mode, EveryPageMode):
        return every_page(total_pages)
    if isinstance(mode, CustomRangeMode):
        return parse_custom_ranges(mode.ranges, total_pages=total_pages)
    if isinstance(mode, SizeBasedMode):
        return _size_chunks(handle, mode.max_bytes, estimator or DocumentSizeEstimator())
    raise ValueError(f"Unsupported split mode: {mode!r}")


def split_handle(
    handle: DocumentHandle,
    output_dir: Path,
    mode: SplitMode,
    *,
    estimator: DocumentSizeEstimator | None = None,
) -> List[Path]:
    """Write the chunks of ``handle`` into ``output_dir`` as ``<base>-<k>.pdf``.

    If any chunk fails, the files already written for ``handle`` are removed
    before the error propagates.
    """

    estimator = estimator or DocumentSizeEstimator()
    generated: List[Path] = []
    emitted: List[PageChunk] = []
    try:
        for index, chunk in enumerate(plan_chunks(handle, mode, estimator), start=1):
            destination = output_dir / build_output_filename(handle.path, index)
            estimator.materialize(handle.slice(chunk.start, chunk.end), destination)
            LOGGER.info(
                "Created %s for pages %s (%d bytes)",
                destination.name,
                chunk.label(),
                destination.stat().st_size,
            )
            generated.append(destination)
            emitted.append(chunk)

        if not isinstance(mode, CustomRangeMode):
            validate_partition(emitted, handle.page_count)
    except Exception:
        for path in generated:
            path.unlink(missing_ok=True)
        LOGGER.warning("Removed %d partial output(s) of %s", len(generated), handle.path.name)
        raise
    LOGGER.info("Split %s into %d file(s)", handle.path.name, len(generated))
    return generated
