"""Sub-command definitions for the batchpdf CLI."""

from __future__ import annotations

import argparse
from pathlib import Path


def parse_password(value: str) -> tuple[str, str]:
    """Parse ``FILE=PASSWORD`` into a ``(resolved path, password)`` pair."""

    path, sep, password = value.partition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"Expected FILE=PASSWORD, got {value!r}")
    return str(Path(path).expanduser().resolve()), password


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("inputs", nargs="+", help="Input PDF files")
    parser.add_argument("-o", "--output-dir", required=True, help="Directory for generated files")
    parser.add_argument(
        "--password",
        dest="passwords",
        action="append",
        type=parse_password,
        default=[],
        metavar="FILE=PASSWORD",
        help="Password for an encrypted input (repeatable)",
    )
