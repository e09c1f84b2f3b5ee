"""Utility helpers for the :mod:`batchpdf.tools.splitter` package."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, List

from ...core.utils import base_name
from .chunking import PageChunk, every_page

LOGGER = logging.getLogger("batchpdf.split")


def _range_tokens(ranges: str) -> Iterator[str]:
    yield from (token.strip() for token in ranges.split(",") if token.strip())


def _parse_token(token: str) -> tuple[int, int] | None:
    if "-" in token:
        parts = token.split("-")
        if len(parts) != 2:
            return None
        try:
            return int(parts[0].strip()), int(parts[1].strip())
        except ValueError:
            return None
    try:
        number = int(token)
    except ValueError:
        return None
    return number, number


def parse_custom_ranges(ranges: str | None, *, total_pages: int) -> List[PageChunk]:
    """Parse a 1-based range list such as ``"1-3, 5, 7-8"`` into chunks.

    Parsing is lenient: malformed segments are skipped, a start below 1 is
    raised to 1, an end past the last page is lowered to it, and segments
    left empty by that clamping are dropped. Segments keep the order they
    were written in and may overlap. A blank range list means every page.
    """

    if ranges is None or not ranges.strip():
        return every_page(total_pages)

    parsed: List[PageChunk] = []
    for token in _range_tokens(ranges):
        bounds = _parse_token(token)
        if bounds is None:
            LOGGER.warning("Ignoring invalid page range %r", token)
            continue
        start, end = bounds
        start = max(start, 1)
        end = min(end, total_pages)
        if start > end:
            LOGGER.warning("Ignoring empty page range %r", token)
            continue
        parsed.append(PageChunk(start - 1, end - 1))
    return parsed


def build_output_filename(source: Path, index: int) -> str:
    """Return ``<basename>-<index>.pdf`` for the ``index``-th (1-based) output."""

    return f"{base_name(source)}-{index}.pdf"
