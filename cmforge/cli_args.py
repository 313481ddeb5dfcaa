# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CLI argument parsing for CMForge.

Handles command-line argument definition, page size specifications and
output file naming.
"""

from __future__ import annotations

import argparse
import os

from . import __version__
from .devices.pdf.pdf import DEFAULT_PAGE_HEIGHT, DEFAULT_PAGE_WIDTH

DEVICES = ["pdf", "stream"]


def _parse_page_size(spec: str) -> tuple[float, float]:
    """Parse a ``WIDTHxHEIGHT`` page size in PDF points, e.g. ``"595x842"``.

    Raises:
        argparse.ArgumentTypeError: If the specification is malformed.
    """
    parts = spec.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"Invalid page size: '{spec}' (expected WIDTHxHEIGHT)")
    try:
        width = float(parts[0])
        height = float(parts[1])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid page size: '{spec}'")
    if not (width > 0 and height > 0):
        raise argparse.ArgumentTypeError(f"Page size must be positive: '{spec}'")
    return width, height


def get_output_base_name(outputfile: str, inputfiles: list[str]) -> str:
    """
    Derive output base name from command-line arguments.

    Args:
        outputfile: The -o argument value (or None)
        inputfiles: List of input files (or empty list)

    Returns:
        Base name for output files (without extension)
    """
    if outputfile:
        base = os.path.basename(outputfile)
        return os.path.splitext(base)[0]
    elif inputfiles and inputfiles[0] != "-":
        base = os.path.basename(inputfiles[0])
        return os.path.splitext(base)[0]
    else:
        return "stdin"


def build_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the CMForge argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="cmforge",
        description="CMForge - PDF Transformation Matrix Emitter",
        epilog="If no input file is provided, the script is read from standard input.",
    )

    parser.add_argument(
        "-V", "--version", action="version",
        version=f"CMForge {__version__}"
    )
    parser.add_argument(
        "inputfiles", nargs="*",
        help="Transform script files to run ('-' for stdin); each starts on a new page"
    )
    parser.add_argument(
        "-o", "--output", dest="outputfile", help="Specify output filename"
    )
    parser.add_argument(
        "-d",
        "--device",
        choices=DEVICES,
        default="pdf",
        help=f'Specify output device ({", ".join(DEVICES)}; default: pdf)',
    )
    parser.add_argument(
        "--page-size", type=_parse_page_size,
        default=(DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT),
        help=f"Page size in points as WIDTHxHEIGHT (default: {DEFAULT_PAGE_WIDTH}x{DEFAULT_PAGE_HEIGHT})"
    )
    parser.add_argument(
        "--compress", action="store_true",
        help="Flate compress page content streams (pdf device only)"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )

    return parser
