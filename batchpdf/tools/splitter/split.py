"""Plugin exposing batch splitting through the registry."""

from __future__ import annotations

from ...batch import BatchReport, run_split
from ...core.utils import get_logger, parse_size
from ..common.interfaces import BaseTool
from ..common.pipeline import register_tool
from .splitter import CustomRangeMode, EveryPageMode, SizeBasedMode, SplitMode

LOGGER = get_logger("batchpdf.tools.split")


@register_tool("split")
class SplitTool(BaseTool):
    name = "split"

    def _mode(self) -> SplitMode:
        config = self.context.config
        mode = config.get("mode", "every")
        if mode == "every":
            return EveryPageMode()
        if mode == "range":
            return CustomRangeMode(config.get("ranges") or "")
        if mode == "size":
            max_size = config.get("max_size")
            if max_size is None:
                raise ValueError("max_size is required when mode='size'")
            return SizeBasedMode(parse_size(max_size))
        raise ValueError(f"Unsupported split mode: {mode}")

    def run(self) -> BatchReport:
        context = self.context
        if not context.input_paths or context.output_dir is None:
            raise ValueError("Split tool requires input files and an output directory")

        mode = self._mode()
        LOGGER.debug(
            "Splitting %d file(s) to %s with %s",
            len(context.input_paths),
            context.output_dir,
            mode,
        )
        report = run_split(context.input_paths, context.output_dir, mode, context.passwords)
        context.resources["result"] = report
        return report
