"""Re-encoding of embedded raster images."""

from __future__ import annotations

import dataclasses
import logging
import math

from PIL import Image
from pypdf import PdfWriter

from ...core.codec import iter_page_images
from .exceptions import TransformError
from .params import CompressionParams

LOGGER = logging.getLogger("batchpdf.compress")

# Icons and other small images keep their original encoding.
MIN_DIMENSION = 64

_JPEG_MODES = {"RGB", "L"}


@dataclasses.dataclass(slots=True)
class TransformStats:
    """Counters for one pass of :func:`apply_params` over a document."""

    seen: int = 0
    replaced: int = 0
    skipped: int = 0
    failed: int = 0
    shared: int = 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def scaled_size(width: int, height: int, scale: float) -> tuple[int, int]:
    """Return the pixel size of a ``width`` x ``height`` image after ``scale``."""

    if scale >= 1.0:
        return width, height
    return max(1, _round_half_up(width * scale)), max(1, _round_half_up(height * scale))


def jpeg_quality(quality: float) -> int:
    """Map a quality in ``(0, 1]`` onto Pillow's 1-100 JPEG scale."""

    return max(1, min(100, _round_half_up(quality * 100)))


def is_eligible(width: int, height: int) -> bool:
    return width >= MIN_DIMENSION and height >= MIN_DIMENSION


def transform_image(image: Image.Image, params: CompressionParams) -> Image.Image | None:
    """Return the resampled replacement for ``image`` or ``None`` to keep it.

    The returned image is in a mode JPEG can encode. The caller applies
    ``params.quality`` when encoding.
    """

    width, height = image.size
    if not is_eligible(width, height):
        return None

    if image.mode not in _JPEG_MODES:
        image = image.convert("L" if image.mode in {"1", "I", "I;16", "F"} else "RGB")

    new_size = scaled_size(width, height, params.scale)
    if new_size != (width, height):
        image = image.resize(new_size, Image.Resampling.LANCZOS)
    return image


def apply_params(writer: PdfWriter, params: CompressionParams) -> TransformStats:
    """Re-encode every eligible image of ``writer`` in place.

    A failure on one image is logged and leaves that image untouched; the
    rest of the document is still processed. An image object referenced from
    several pages is transformed once per pass.
    """

    stats = TransformStats()
    quality = jpeg_quality(params.quality)
    replaced_per_page: dict[int, int] = {}
    visited: set[int] = set()

    for page_index, image_file in iter_page_images(writer):
        stats.seen += 1
        name = getattr(image_file, "name", "?")
        reference = getattr(image_file, "indirect_reference", None)
        if reference is not None:
            if reference.idnum in visited:
                stats.shared += 1
                continue
            visited.add(reference.idnum)
        try:
            replacement = transform_image(image_file.image, params)
            if replacement is None:
                stats.skipped += 1
                continue
            image_file.replace(replacement, quality=quality)
        except Exception as exc:  # corrupt streams, unsupported colour spaces
            stats.failed += 1
            LOGGER.warning("%s", TransformError(page_index, name, exc))
            continue
        stats.replaced += 1
        replaced_per_page[page_index] = replaced_per_page.get(page_index, 0) + 1

    for page_index, count in sorted(replaced_per_page.items()):
        LOGGER.debug("Page %d: replaced %d image(s)", page_index, count)
    LOGGER.debug(
        "Applied %s: %d seen, %d replaced, %d skipped, %d failed, %d shared",
        params,
        stats.seen,
        stats.replaced,
        stats.skipped,
        stats.failed,
        stats.shared,
    )
    return stats
