"""Batch entry points: run one operation over many input files.

Files are processed strictly one after another. Each file is gated on
password availability, loaded, transformed, written and released before the
next one starts. A failure on one file is recorded and the batch moves on;
only an unusable input list or output directory aborts the whole call.
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Callable, Dict, List, Literal, Sequence, Union

from .core.codec import DocumentHandle
from .core.utils import resolve_path
from .exceptions import InvalidInputError, MissingPasswordError, OutputDirectoryError
from .security import PasswordMap, open_for_batch
from .tools.compressor import (
    CompressionLevel,
    SearchBounds,
    compress_to_target,
    compress_with_params,
    get_level,
    output_name,
    start_for_size,
)
from .tools.splitter import CustomRangeMode, EveryPageMode, SizeBasedMode, SplitMode, split_handle

LOGGER = logging.getLogger("batchpdf.batch")

PathLike = Union[str, Path]
FailureReason = Literal["missing_password", "error"]
FileProcessor = Callable[[DocumentHandle, Path], List[Path]]


@dataclasses.dataclass(frozen=True)
class PresetMode:
    """Single pass with a named preset.

    With ``adaptive`` set, the starting preset is chosen from the input size
    instead (see :func:`~batchpdf.tools.compressor.start_for_size`).
    """

    level: Union[str, CompressionLevel] = "medium"
    adaptive: bool = False


@dataclasses.dataclass(frozen=True)
class TargetSizeMode:
    """Search for the output closest to ``target_bytes``."""

    target_bytes: int
    bounds: SearchBounds | None = None


CompressMode = Union[PresetMode, TargetSizeMode]


@dataclasses.dataclass(frozen=True)
class FileFailure:
    path: Path
    reason: FailureReason
    message: str


@dataclasses.dataclass
class BatchReport:
    """Outcome of one batch call."""

    operation: str
    outputs: Dict[Path, List[Path]] = dataclasses.field(default_factory=dict)
    failures: List[FileFailure] = dataclasses.field(default_factory=list)
    aborted: bool = False
    error: str | None = None

    @property
    def success(self) -> bool:
        return not self.aborted and not self.failures

    @property
    def missing_password_count(self) -> int:
        return sum(1 for failure in self.failures if failure.reason == "missing_password")

    @property
    def error_count(self) -> int:
        return sum(1 for failure in self.failures if failure.reason == "error")

    @property
    def failed_paths(self) -> List[Path]:
        return [failure.path for failure in self.failures]

    def summary(self) -> str:
        if self.aborted:
            return f"{self.operation} aborted: {self.error}"
        return (
            f"{self.operation}: {len(self.outputs)} succeeded, "
            f"{self.missing_password_count} skipped for missing password, "
            f"{self.error_count} failed"
        )


def validate_input_files(files: Sequence[PathLike] | None) -> List[Path]:
    """Return resolved input paths, rejecting empty lists and non-PDF entries."""

    if not files:
        raise InvalidInputError("No input files given")
    resolved: List[Path] = []
    for item in files:
        if item is None:
            raise InvalidInputError("Input file list contains an empty entry")
        path = resolve_path(item)
        if not path.is_file():
            raise InvalidInputError(f"Input file does not exist: {path}")
        if path.suffix.lower() != ".pdf":
            raise InvalidInputError(f"Input file is not a PDF: {path}")
        resolved.append(path)
    return resolved


def prepare_output_dir(output_dir: PathLike | None) -> Path:
    """Create ``output_dir`` if needed and return it resolved."""

    if output_dir is None or not str(output_dir).strip():
        raise OutputDirectoryError("No output directory given")
    path = resolve_path(output_dir)
    if path.exists() and not path.is_dir():
        raise OutputDirectoryError(f"Output path is not a directory: {path}")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(f"Unable to create output directory {path}: {exc}") from exc
    return path


def _run_batch(
    operation: str,
    files: Sequence[PathLike] | None,
    output_dir: PathLike | None,
    passwords: PasswordMap | None,
    process: FileProcessor,
) -> BatchReport:
    report = BatchReport(operation)
    try:
        inputs = validate_input_files(files)
        destination = prepare_output_dir(output_dir)
    except (InvalidInputError, OutputDirectoryError) as exc:
        LOGGER.error("%s aborted: %s", operation, exc)
        report.aborted = True
        report.error = str(exc)
        return report

    for path in inputs:
        try:
            with open_for_batch(path, passwords) as handle:
                report.outputs[path] = process(handle, destination)
        except MissingPasswordError as exc:
            LOGGER.warning("Skipping encrypted file %s - no password provided", path.name)
            report.failures.append(FileFailure(path, "missing_password", str(exc)))
        except Exception as exc:  # one bad file must not stop the batch
            LOGGER.error(
                "Error during %s of %s: %s",
                operation,
                path.name,
                exc,
                exc_info=LOGGER.isEnabledFor(logging.DEBUG),
            )
            report.failures.append(FileFailure(path, "error", str(exc)))

    LOGGER.info("%s", report.summary())
    return report


def _compressor(mode: CompressMode) -> FileProcessor:
    if isinstance(mode, TargetSizeMode):
        if mode.target_bytes <= 0:
            raise InvalidInputError("Target size must be a positive number of bytes")

        def by_target(handle: DocumentHandle, output_dir: Path) -> List[Path]:
            destination = output_dir / output_name(handle.path)
            result = compress_to_target(
                handle, mode.target_bytes, destination, bounds=mode.bounds
            )
            return [result.output_path]

        return by_target

    if isinstance(mode, PresetMode):
        try:
            level = get_level(mode.level)
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        def by_preset(handle: DocumentHandle, output_dir: Path) -> List[Path]:
            chosen = level
            if mode.adaptive:
                chosen = start_for_size(handle.path.stat().st_size)
                LOGGER.debug("Adaptive start for %s: %s", handle.path.name, chosen.name)
            destination = output_dir / output_name(handle.path)
            result = compress_with_params(handle, chosen.params, destination)
            return [result.output_path]

        return by_preset

    raise InvalidInputError(f"Unsupported compression mode: {mode!r}")


def _splitter(mode: SplitMode) -> FileProcessor:
    if not isinstance(mode, (EveryPageMode, CustomRangeMode, SizeBasedMode)):
        raise InvalidInputError(f"Unsupported split mode: {mode!r}")

    def split_one(handle: DocumentHandle, output_dir: Path) -> List[Path]:
        return split_handle(handle, output_dir, mode)

    return split_one


def _aborted(operation: str, exc: InvalidInputError) -> BatchReport:
    LOGGER.error("%s aborted: %s", operation, exc)
    return BatchReport(operation, aborted=True, error=str(exc))


def run_compress(
    files: Sequence[PathLike] | None,
    output_dir: PathLike | None,
    mode: CompressMode,
    passwords: PasswordMap | None = None,
) -> BatchReport:
    """Compress every file in ``files`` into ``output_dir``."""

    try:
        process = _compressor(mode)
    except InvalidInputError as exc:
        return _aborted("compress", exc)
    return _run_batch("compress", files, output_dir, passwords, process)


def run_split(
    files: Sequence[PathLike] | None,
    output_dir: PathLike | None,
    mode: SplitMode,
    passwords: PasswordMap | None = None,
) -> BatchReport:
    """Split every file in ``files`` into ``output_dir``."""

    try:
        process = _splitter(mode)
    except InvalidInputError as exc:
        return _aborted("split", exc)
    return _run_batch("split", files, output_dir, passwords, process)


def compress(
    files: Sequence[PathLike] | None,
    output_dir: PathLike | None,
    mode: CompressMode,
    passwords: PasswordMap | None = None,
) -> bool:
    """Return ``True`` when every file was compressed."""

    return run_compress(files, output_dir, mode, passwords).success


def split(
    files: Sequence[PathLike] | None,
    output_dir: PathLike | None,
    mode: SplitMode,
    passwords: PasswordMap | None = None,
) -> bool:
    """Return ``True`` when every file was split."""

    return run_split(files, output_dir, mode, passwords).success


__all__ = [
    "BatchReport",
    "CompressMode",
    "FileFailure",
    "PresetMode",
    "TargetSizeMode",
    "compress",
    "prepare_output_dir",
    "run_compress",
    "run_split",
    "split",
    "validate_input_files",
]
