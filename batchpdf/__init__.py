"""Batch PDF compression and splitting with size budgets."""

from __future__ import annotations

from .batch import (
    BatchReport,
    FileFailure,
    PresetMode,
    TargetSizeMode,
    compress,
    run_compress,
    run_split,
    split,
)
from .core.codec import DocumentHandle, is_encrypted, load_document, requires_password
from .core.estimator import DocumentSizeEstimator
from .core.utils import parse_size, to_bytes
from .exceptions import (
    BatchPDFError,
    DocumentLoadError,
    InvalidInputError,
    InvalidPasswordError,
    MissingPasswordError,
    OutputDirectoryError,
    SerializationError,
)
from .security import PasswordMap, lookup_password
from .tools import load_builtin_plugins
from .tools.common.interfaces import BatchContext
from .tools.common.pipeline import ToolRegistry, register_tool, registry
from .tools.compressor import (
    CompressionError,
    CompressionLevel,
    CompressionParams,
    CompressionResult,
    SearchBounds,
    get_level,
)
from .tools.splitter import CustomRangeMode, EveryPageMode, PageChunk, SizeBasedMode, SplitError

load_builtin_plugins()

__version__ = "0.1.0"

__all__ = [
    "BatchContext",
    "BatchPDFError",
    "BatchReport",
    "CompressionError",
    "CompressionLevel",
    "CompressionParams",
    "CompressionResult",
    "CustomRangeMode",
    "DocumentHandle",
    "DocumentLoadError",
    "DocumentSizeEstimator",
    "EveryPageMode",
    "FileFailure",
    "InvalidInputError",
    "InvalidPasswordError",
    "MissingPasswordError",
    "OutputDirectoryError",
    "PageChunk",
    "PasswordMap",
    "PresetMode",
    "SearchBounds",
    "SerializationError",
    "SizeBasedMode",
    "SplitError",
    "TargetSizeMode",
    "ToolRegistry",
    "compress",
    "get_level",
    "is_encrypted",
    "load_document",
    "lookup_password",
    "parse_size",
    "register_tool",
    "registry",
    "requires_password",
    "run_compress",
    "run_split",
    "split",
    "to_bytes",
]
