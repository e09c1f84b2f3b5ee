"""Greedy size-bounded page chunking."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator

from .exceptions import InvalidPartitionError

LOGGER = logging.getLogger("batchpdf.split")

MeasureRange = Callable[[int, int], int]


@dataclass(frozen=True)
class PageChunk:
    """Inclusive, 0-based run of pages written as one output file."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid page chunk {self.start}-{self.end}")

    @property
    def page_count(self) -> int:
        return self.end - self.start + 1

    def label(self) -> str:
        """Return the 1-based page span, e.g. ``"4-6"`` or ``"7"``."""

        if self.start == self.end:
            return str(self.start + 1)
        return f"{self.start + 1}-{self.end + 1}"


def every_page(page_count: int) -> list[PageChunk]:
    return [PageChunk(index, index) for index in range(page_count)]


def iter_size_chunks(
    page_count: int,
    max_bytes: int,
    measure: MeasureRange,
) -> Iterator[tuple[PageChunk, int]]:
    """Yield ``(chunk, estimated_size)`` pairs covering ``[0, page_count)``.

    Starting at the cursor, the chunk grows one page at a time while the
    serialized size of the range, as reported by ``measure(start, end)``,
    stays within ``max_bytes``. The starting page alone is always accepted,
    so a page larger than the budget forms its own chunk. Each extension
    re-measures the whole range, which is quadratic in the chunk length.

    ``max_bytes <= 0`` yields one page per chunk without measuring.
    """

    if max_bytes <= 0:
        for chunk in every_page(page_count):
            yield chunk, 0
        return

    cursor = 0
    while cursor < page_count:
        end = cursor
        accepted_size = 0
        while end < page_count:
            size = measure(cursor, end)
            if size <= max_bytes or end == cursor:
                accepted_size = size
                end += 1
            else:
                break
        chunk = PageChunk(cursor, end - 1)
        LOGGER.debug(
            "Chunk pages %s: ~%d bytes (limit %d)", chunk.label(), accepted_size, max_bytes
        )
        yield chunk, accepted_size
        cursor = chunk.end + 1


def validate_partition(chunks: Iterable[PageChunk], page_count: int) -> None:
    """Raise :class:`InvalidPartitionError` unless ``chunks`` tile ``[0, page_count)``."""

    expected = 0
    for chunk in chunks:
        if chunk.start != expected:
            raise InvalidPartitionError(
                f"Chunk {chunk.label()} does not start at page {expected + 1}"
            )
        expected = chunk.end + 1
    if expected != page_count:
        raise InvalidPartitionError(f"Chunks cover {expected} of {page_count} pages")
