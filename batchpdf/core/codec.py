"""Document codec built on :mod:`pypdf`.

Every tool talks to PDF files through this module: loading and decrypting,
cloning the decrypted document into a fresh :class:`~pypdf.PdfWriter`,
slicing page ranges and enumerating embedded images. Writers returned from
here never carry the source's ``/Encrypt`` entry, so outputs are written in
the clear even when the input was password protected.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import Any, Iterator

from pypdf import PasswordType, PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import DocumentLoadError, InvalidPasswordError, MissingPasswordError
from .utils import resolve_path

__all__ = [
    "DocumentHandle",
    "load_document",
    "is_encrypted",
    "requires_password",
    "iter_page_images",
]

LOGGER = logging.getLogger("batchpdf.codec")

PathLike = str | Path


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise DocumentLoadError(f"Unable to read PDF: {path}") from exc


def _open_reader(path: Path, data: bytes) -> PdfReader:
    try:
        return PdfReader(BytesIO(data))
    except Exception as exc:  # pypdf exceptions vary
        raise DocumentLoadError(f"Unable to parse PDF: {path}") from exc


def _clean_metadata(reader: PdfReader) -> dict[str, str]:
    try:
        metadata = reader.metadata
    except Exception:  # pragma: no cover - damaged info dictionaries
        LOGGER.debug("Ignoring unreadable document information dictionary")
        return {}
    if not metadata:
        return {}
    return {
        key: str(value)
        for key, value in metadata.items()
        if isinstance(key, str) and value is not None
    }


class DocumentHandle:
    """Exclusive owner of one decrypted input document.

    The handle is a context manager; leaving the ``with`` block releases the
    in-memory stream backing the reader whether processing succeeded or not.
    """

    def __init__(self, path: Path, reader: PdfReader, *, password: str | None = None) -> None:
        self.path = path
        self.password = password
        self._reader: PdfReader | None = reader
        self._metadata = _clean_metadata(reader)

    def __enter__(self) -> "DocumentHandle":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.page_count} pages"
        return f"DocumentHandle({self.path.name!r}, {state})"

    @property
    def closed(self) -> bool:
        return self._reader is None

    @property
    def reader(self) -> PdfReader:
        if self._reader is None:
            raise ValueError(f"Document {self.path.name} has already been released")
        return self._reader

    @property
    def page_count(self) -> int:
        return len(self.reader.pages)

    @property
    def was_encrypted(self) -> bool:
        return bool(self.reader.is_encrypted)

    def metadata(self) -> dict[str, str]:
        return dict(self._metadata)

    def clone(self) -> PdfWriter:
        """Return a fresh, unencrypted writer holding a copy of the whole document."""

        writer = PdfWriter(clone_from=self.reader)
        if self._metadata:
            writer.add_metadata(self._metadata)
        return writer

    def slice(self, start: int, end: int) -> PdfWriter:
        """Return a writer holding pages ``start`` to ``end`` (0-based, inclusive)."""

        total = self.page_count
        if start < 0 or end >= total or start > end:
            raise IndexError(f"Page slice {start}-{end} outside document of {total} pages")
        writer = PdfWriter()
        for index in range(start, end + 1):
            writer.add_page(self.reader.pages[index])
        if self._metadata:
            writer.add_metadata(self._metadata)
        return writer

    def close(self) -> None:
        if self._reader is None:
            return
        stream = getattr(self._reader, "stream", None)
        if stream is not None:
            stream.close()
        self._reader = None
        LOGGER.debug("Released %s", self.path.name)


def _blank(password: str | None) -> bool:
    return password is None or not password.strip()


def load_document(path: PathLike, password: str | None = None) -> DocumentHandle:
    """Load ``path``, decrypting it with ``password`` when it is encrypted.

    Encrypted files are first tried with the empty user password so documents
    that only restrict permissions open without one.

    Raises:
        DocumentLoadError: The file cannot be read or parsed.
        MissingPasswordError: The file needs a password and none was given.
        InvalidPasswordError: The given password was rejected.
    """

    pdf_path = resolve_path(path)
    reader = _open_reader(pdf_path, _read_bytes(pdf_path))
    used_password: str | None = None

    if reader.is_encrypted:
        if reader.decrypt("") == PasswordType.NOT_DECRYPTED:
            if _blank(password):
                raise MissingPasswordError(pdf_path)
            try:
                status = reader.decrypt(password)
            except Exception as exc:  # pypdf decrypt errors vary
                raise DocumentLoadError(f"Failed to decrypt PDF: {pdf_path}") from exc
            if status == PasswordType.NOT_DECRYPTED:
                raise InvalidPasswordError(pdf_path)
            used_password = password
        LOGGER.debug("Decrypted %s", pdf_path.name)

    try:
        page_count = len(reader.pages)
    except Exception as exc:  # pypdf exceptions vary
        raise DocumentLoadError(f"Unable to read page tree: {pdf_path}") from exc

    LOGGER.debug("Loaded %s (%d pages)", pdf_path.name, page_count)
    return DocumentHandle(pdf_path, reader, password=used_password)


def is_encrypted(path: PathLike) -> bool:
    """Return ``True`` when ``path`` carries an encryption dictionary.

    Unreadable files report ``False`` so that the load step surfaces the real
    parse error instead of a misleading password prompt.
    """

    pdf_path = resolve_path(path)
    try:
        reader = PdfReader(str(pdf_path))
    except (OSError, PdfReadError) as exc:
        LOGGER.debug("Could not inspect %s for encryption: %s", pdf_path, exc)
        return False
    return bool(reader.is_encrypted)


def requires_password(path: PathLike) -> bool:
    """Return ``True`` when ``path`` cannot be opened without a user password."""

    pdf_path = resolve_path(path)
    try:
        reader = PdfReader(str(pdf_path))
        if not reader.is_encrypted:
            return False
        return reader.decrypt("") == PasswordType.NOT_DECRYPTED
    except (OSError, PdfReadError) as exc:
        LOGGER.debug("Could not inspect %s for encryption: %s", pdf_path, exc)
        return False


def iter_page_images(writer: PdfWriter) -> Iterator[tuple[int, Any]]:
    """Yield ``(page_index, image_file)`` for each embedded raster of ``writer``."""

    for page_index, page in enumerate(writer.pages):
        try:
            images = list(page.images)
        except Exception as exc:  # damaged resource dictionaries
            LOGGER.warning("Page %d: unable to enumerate images: %s", page_index, exc)
            continue
        for image in images:
            yield page_index, image
