"""Exception hierarchy shared by the batchpdf tools."""

from __future__ import annotations

from pathlib import Path


class BatchPDFError(Exception):
    """Base exception for all :mod:`batchpdf` errors."""


class InvalidInputError(BatchPDFError):
    """Raised when the batch input list is empty or names unusable files."""


class OutputDirectoryError(BatchPDFError):
    """Raised when the output directory cannot be created."""


class DocumentLoadError(BatchPDFError):
    """Raised when a PDF cannot be parsed."""


class MissingPasswordError(BatchPDFError):
    """Raised when a file is encrypted and no usable password is available."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Encrypted PDF requires a password: {path.name}")


class InvalidPasswordError(BatchPDFError):
    """Raised when the supplied password does not open the document."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Incorrect password for encrypted PDF: {path.name}")


class SerializationError(BatchPDFError):
    """Raised when a document cannot be written to bytes or disk."""
