from __future__ import annotations

from pathlib import Path

import pytest

from batchpdf.tools.splitter.chunking import PageChunk, every_page
from batchpdf.tools.splitter.utils import build_output_filename, parse_custom_ranges


def _spans(chunks: list[PageChunk]) -> list[tuple[int, int]]:
    return [(chunk.start + 1, chunk.end + 1) for chunk in chunks]


def test_parse_ranges_in_written_order() -> None:
    chunks = parse_custom_ranges("1-3, 5, 7-8", total_pages=10)
    assert _spans(chunks) == [(1, 3), (5, 5), (7, 8)]


def test_parse_ranges_allows_overlap_and_reordering() -> None:
    chunks = parse_custom_ranges("4-6,1-5", total_pages=6)
    assert _spans(chunks) == [(4, 6), (1, 5)]


def test_parse_ranges_clamps_to_document() -> None:
    chunks = parse_custom_ranges("0-2, 4-99", total_pages=5)
    assert _spans(chunks) == [(1, 2), (4, 5)]


@pytest.mark.parametrize("ranges", ["abc", "3-1", "1-2-3", "9", " , ,"])
def test_parse_ranges_skips_invalid_segments(ranges: str) -> None:
    assert parse_custom_ranges(ranges, total_pages=5) == []


def test_parse_ranges_keeps_valid_segments_around_invalid_ones() -> None:
    chunks = parse_custom_ranges("1, x, 3-a, 5", total_pages=5)
    assert _spans(chunks) == [(1, 1), (5, 5)]


@pytest.mark.parametrize("ranges", [None, "", "   "])
def test_blank_ranges_mean_every_page(ranges) -> None:
    assert parse_custom_ranges(ranges, total_pages=3) == every_page(3)


def test_build_output_filename() -> None:
    assert build_output_filename(Path("/in/Report.pdf"), 1) == "Report-1.pdf"
    assert build_output_filename(Path("scan.final.PDF"), 12) == "scan.final-12.pdf"
