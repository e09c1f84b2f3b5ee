"""CLI helpers for compressing PDF files."""

from __future__ import annotations

from argparse import ArgumentParser, _SubParsersAction

from ...tools.common.interfaces import BatchContext
from ...tools.compressor.params import level_names
from . import add_common_arguments


def configure_parser(subparsers: _SubParsersAction[ArgumentParser]) -> None:
    parser = subparsers.add_parser("compress", help="Compress PDF files")
    add_common_arguments(parser)
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--level",
        choices=level_names(),
        default="medium",
        help="Compression preset",
    )
    group.add_argument(
        "--target-size",
        default=None,
        help="Desired output size per file, e.g. 500KB or 2MB",
    )
    parser.add_argument(
        "--adaptive",
        action="store_true",
        help="Pick the starting preset from each file's size",
    )
    parser.set_defaults(tool_name="compress", build_context=_build_context)


def _build_context(args) -> BatchContext:
    return BatchContext(
        input_paths=args.inputs,
        output_dir=args.output_dir,
        passwords=dict(args.passwords),
        config={
            "level": args.level,
            "target_size": args.target_size,
            "adaptive": args.adaptive,
        },
    )
