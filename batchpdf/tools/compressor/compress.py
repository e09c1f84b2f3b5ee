"""Plugin exposing batch compression through the registry."""

from __future__ import annotations

from ...batch import BatchReport, PresetMode, TargetSizeMode, run_compress
from ...core.utils import get_logger, parse_size
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .params import SearchBounds

LOGGER = get_logger("batchpdf.tools.compress")


@register_tool("compress")
class CompressTool(BaseTool):
    name = "compress"

    def _mode(self) -> PresetMode | TargetSizeMode:
        config = self.context.config
        target = config.get("target_size")
        if target:
            return TargetSizeMode(parse_size(target), bounds=SearchBounds.from_env())
        level = config.get("level")
        if level is None:
            level = config.get("compression_level", "medium")
        return PresetMode(level, adaptive=bool(config.get("adaptive", False)))

    def run(self) -> BatchReport:
        context = self.context
        if not context.input_paths or context.output_dir is None:
            raise ValueError("Compression requires input files and an output directory")

        mode = self._mode()
        LOGGER.debug(
            "Compressing %d file(s) to %s with %s",
            len(context.input_paths),
            context.output_dir,
            mode,
        )
        report = run_compress(context.input_paths, context.output_dir, mode, context.passwords)
        context.resources["result"] = report
        return report
