"""Password gating shared by every batch operation.

Passwords come from a read-only mapping supplied by the caller. The mapping
is consulted, never modified, and an empty entry counts as no password.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping

from ..core.codec import DocumentHandle, is_encrypted, load_document, requires_password
from ..core.utils import get_logger, resolve_path
from ..exceptions import MissingPasswordError

PathLike = str | Path
PasswordMap = Mapping[PathLike, str]

LOGGER = get_logger("batchpdf.security")


def _candidate_keys(path: PathLike) -> list[PathLike]:
    given = Path(path)
    resolved = resolve_path(path)
    keys: list[PathLike] = []
    for key in (path, given, str(given), resolved, str(resolved)):
        if key not in keys:
            keys.append(key)
    return keys


def lookup_password(passwords: PasswordMap | None, path: PathLike) -> str | None:
    """Return the usable password stored for ``path`` or ``None``."""

    if not passwords:
        return None
    for key in _candidate_keys(path):
        try:
            value = passwords.get(key)
        except TypeError:  # unhashable key spellings
            continue
        if value is not None and value.strip():
            return value
    return None


def open_for_batch(path: PathLike, passwords: PasswordMap | None) -> DocumentHandle:
    """Open ``path`` for processing, refusing before any load when locked.

    Raises:
        MissingPasswordError: ``path`` needs a password and ``passwords`` has
            no usable entry for it.
    """

    pdf_path = resolve_path(path)
    password = lookup_password(passwords, path)
    if password is None and requires_password(pdf_path):
        raise MissingPasswordError(pdf_path)
    LOGGER.debug(
        "Opening %s with password %s",
        pdf_path.name,
        "<provided>" if password is not None else "<none>",
    )
    return load_document(pdf_path, password)


__all__ = [
    "PasswordMap",
    "is_encrypted",
    "lookup_password",
    "open_for_batch",
    "requires_password",
]
