"""Context object and base class shared by batchpdf tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from ...core.utils import resolve_path


@dataclass
class BatchContext:
    """Inputs, destination, passwords and options of one tool invocation.

    Tools store their outcome under ``resources["result"]``.
    """

    input_paths: list[Path] = field(default_factory=list)
    output_dir: Path | None = None
    passwords: Mapping[str | Path, str] = field(default_factory=dict)
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.input_paths = [resolve_path(path) for path in self.input_paths]
        if self.output_dir is not None:
            self.output_dir = resolve_path(self.output_dir)


class BaseTool:
    """A batch operation the CLI can run by name."""

    name: str

    def __init__(self, context: BatchContext) -> None:
        self.context = context

    def run(self) -> Any:
        raise NotImplementedError
