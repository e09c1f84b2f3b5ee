"""Compression utilities exposed through the batchpdf tools namespace."""

from __future__ import annotations

from .candidates import Candidate, CandidateSelector
from .compressor import (
    CompressionResult,
    compress_to_target,
    compress_with_params,
    output_name,
)
from .exceptions import CompressionError, NoCandidateError, TransformError
from .params import (
    LEVELS,
    LOW_PRESET,
    CompressionLevel,
    CompressionParams,
    SearchBounds,
    get_level,
    level_names,
    start_for_size,
)
from .raster import MIN_DIMENSION, TransformStats, apply_params, scaled_size, transform_image
from .search import SearchState, TargetSizeSearch, fallback_threshold, tolerance

__all__ = [
    "Candidate",
    "CandidateSelector",
    "CompressionError",
    "CompressionLevel",
    "CompressionParams",
    "CompressionResult",
    "LEVELS",
    "LOW_PRESET",
    "MIN_DIMENSION",
    "NoCandidateError",
    "SearchBounds",
    "SearchState",
    "TargetSizeSearch",
    "TransformError",
    "TransformStats",
    "apply_params",
    "compress_to_target",
    "compress_with_params",
    "fallback_threshold",
    "get_level",
    "level_names",
    "output_name",
    "scaled_size",
    "start_for_size",
    "tolerance",
    "transform_image",
]
