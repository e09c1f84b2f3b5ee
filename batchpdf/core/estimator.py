"""Byte-size measurement for candidate documents."""

from __future__ import annotations

import logging
import os
import tempfile
from io import BytesIO
from pathlib import Path

from pypdf import PdfWriter

from ..exceptions import SerializationError

LOGGER = logging.getLogger("batchpdf.codec")


class DocumentSizeEstimator:
    """Serialize writers either to measure them or to persist them.

    ``measure`` never touches the filesystem. Serializing the same writer
    state twice yields the same byte count.
    """

    def serialize(self, writer: PdfWriter) -> bytes:
        buffer = BytesIO()
        try:
            writer.write(buffer)
        except Exception as exc:  # pypdf write errors vary
            raise SerializationError(f"Unable to serialize document: {exc}") from exc
        return buffer.getvalue()

    def measure(self, writer: PdfWriter) -> int:
        size = len(self.serialize(writer))
        LOGGER.debug("Measured %d bytes", size)
        return size

    def materialize(self, writer: PdfWriter, path: Path) -> Path:
        """Write ``writer`` to ``path`` and return it."""

        data = self.serialize(writer)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise SerializationError(f"Unable to write PDF to {path}") from exc
        return path

    def materialize_temp(self, writer: PdfWriter, directory: Path, prefix: str) -> Path:
        """Write ``writer`` to a new uniquely named file inside ``directory``."""

        data = self.serialize(writer)
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(prefix=prefix, suffix=".pdf", dir=directory)
        except OSError as exc:
            raise SerializationError(f"Unable to create candidate file in {directory}") from exc
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as stream:
                stream.write(data)
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise SerializationError(f"Unable to write candidate {path}") from exc
        return path
