"""CLI helpers for the split command."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import BatchContext
from . import add_common_arguments


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("split", help="Split PDF files into multiple documents")
    add_common_arguments(parser)
    parser.add_argument("--mode", choices=["every", "range", "size"], default="every")
    parser.add_argument("--ranges", help="Comma separated page ranges, e.g. 1-3,5", default=None)
    parser.add_argument(
        "--max-size",
        help="Largest output file when using --mode size, e.g. 1MB",
        default=None,
    )
    parser.set_defaults(tool_name="split", build_context=_build_context)


def _build_context(args) -> BatchContext:
    return BatchContext(
        input_paths=args.inputs,
        output_dir=args.output_dir,
        passwords=dict(args.passwords),
        config={"mode": args.mode, "ranges": args.ranges, "max_size": args.max_size},
    )
