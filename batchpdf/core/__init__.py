"""Shared document helpers used by every batchpdf tool."""

from __future__ import annotations

from .codec import DocumentHandle, is_encrypted, iter_page_images, load_document, requires_password
from .estimator import DocumentSizeEstimator

__all__ = [
    "DocumentHandle",
    "DocumentSizeEstimator",
    "is_encrypted",
    "iter_page_images",
    "load_document",
    "requires_password",
]
