"""Command line interface for the batchpdf toolkit."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from ..batch import BatchReport
from ..tools import load_builtin_plugins
from ..tools.common.interfaces import BatchContext
from ..tools.common.pipeline import registry
from .commands import compress, split

COMMAND_MODULES = [compress, split]


def _create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="batchpdf", description="Batch PDF compression and splitting")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True
    for module in COMMAND_MODULES:
        module.configure_parser(subparsers)
    return parser


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def main(argv: Sequence[str] | None = None) -> int:
    load_builtin_plugins()
    parser = _create_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    context: BatchContext = args.build_context(args)
    tool = registry.create(args.tool_name, context)
    try:
        report: BatchReport = tool.run()
    except ValueError as exc:
        parser.error(str(exc))
    print(report.summary())
    return 0 if report.success else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
