"""Custom exception types for :mod:`batchpdf.tools.compressor`."""

from __future__ import annotations

from ...exceptions import BatchPDFError


class CompressionError(BatchPDFError):
    """Raised when compressing one document fails."""


class TransformError(CompressionError):
    """Raised when a single embedded image cannot be re-encoded."""

    def __init__(self, page_index: int, name: str, reason: object) -> None:
        self.page_index = page_index
        self.name = name
        super().__init__(f"Page {page_index}: image {name} not re-encoded: {reason}")


class NoCandidateError(CompressionError):
    """Raised when a search pass produced nothing worth measuring."""
