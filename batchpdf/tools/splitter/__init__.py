"""Split utilities exposed through the batchpdf tools namespace."""

from __future__ import annotations

from .chunking import PageChunk, every_page, iter_size_chunks, validate_partition
from .exceptions import InvalidPartitionError, SplitError
from .splitter import (
    CustomRangeMode,
    EveryPageMode,
    SizeBasedMode,
    SplitMode,
    plan_chunks,
    split_handle,
)
from .utils import build_output_filename, parse_custom_ranges

__all__ = [
    "CustomRangeMode",
    "EveryPageMode",
    "InvalidPartitionError",
    "PageChunk",
    "SizeBasedMode",
    "SplitError",
    "SplitMode",
    "build_output_filename",
    "every_page",
    "iter_size_chunks",
    "parse_custom_ranges",
    "plan_chunks",
    "split_handle",
    "validate_partition",
]
