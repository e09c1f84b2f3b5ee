"""Utilities shared by batchpdf tools."""

from __future__ import annotations

import logging
import re
from pathlib import Path

KB = 1024
MB = 1024 * 1024

_UNITS = {"B": 1, "KB": KB, "MB": MB}
_SIZE_PATTERN = re.compile(r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[KkMm]?[Bb]?)\s*$")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def to_bytes(value: float, unit: str = "B") -> int:
    """Normalise ``value`` expressed in ``unit`` (``B``, ``KB`` or ``MB``) to bytes."""

    key = unit.strip().upper()
    if key == "K":
        key = "KB"
    elif key == "M":
        key = "MB"
    try:
        factor = _UNITS[key]
    except KeyError as exc:
        raise ValueError(f"Unsupported size unit: {unit!r}") from exc
    if value < 0:
        raise ValueError("Size must not be negative")
    return int(round(value * factor))


def parse_size(text: str | int) -> int:
    """Parse a human size such as ``"750KB"``, ``"1.5 MB"`` or ``"2048"`` into bytes."""

    if isinstance(text, int):
        return to_bytes(text)
    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid size: {text!r}")
    unit = match.group("unit") or "B"
    return to_bytes(float(match.group("value")), unit)


def sizeof_fmt(num_bytes: float) -> str:
    """Format *num_bytes* into a human-friendly string."""

    step_unit = 1024.0
    for unit in ("bytes", "KiB", "MiB", "GiB"):
        if abs(num_bytes) < step_unit:
            return f"{num_bytes:3.1f} {unit}"
        num_bytes /= step_unit
    return f"{num_bytes:.1f} TiB"


_PDF_SUFFIX = re.compile(r"\.pdf$", re.IGNORECASE)


def base_name(path: Path) -> str:
    """Return the file name of ``path`` without a trailing ``.pdf`` (any case)."""

    return _PDF_SUFFIX.sub("", path.name)
