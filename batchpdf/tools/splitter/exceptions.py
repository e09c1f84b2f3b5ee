"""Custom exceptions raised by :mod:`batchpdf.tools.splitter`."""

from __future__ import annotations

from ...exceptions import BatchPDFError


class SplitError(BatchPDFError):
    """Raised when a document cannot be split."""


class InvalidPartitionError(SplitError):
    """Raised when computed chunks do not partition the page range."""
