"""Namespace for pluggable batchpdf tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from .compressor import compress  # noqa: F401  # register the compress tool
    from .splitter import split  # noqa: F401  # register the split tool


__all__ = ["registry", "load_builtin_plugins"]
