#!/usr/bin/env python3
# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CMForge command line.

Runs transform scripts and writes the resulting pages either as a PDF file
or as raw content stream text.

Usage:
    cmforge drawing.cms
    cmforge -o out.pdf --page-size 595x842 a.cms b.cms
    cmforge -d stream < drawing.cms
"""

import logging
import sys
from typing import Optional

from .cli_args import build_argument_parser, get_output_base_name
from .core.error import CMForgeError
from .core.script import ScriptRunner
from .devices.pdf.pdf import PDFDocument

logger = logging.getLogger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _write_stream(document: PDFDocument, out) -> None:
    for page_no, page in enumerate(document.pages, start=1):
        page.close()
        out.write(f"% page {page_no}\n")
        for line in page.lines:
            out.write(line + "\n")


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for CMForge.

    Returns:
        Exit code: 0 for success, 1 for error
    """
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    inputfiles = args.inputfiles or ["-"]
    width, height = args.page_size
    document = PDFDocument(width, height)

    try:
        for path in inputfiles:
            logger.debug("running %s", path)
            # each input file starts on its own page
            ScriptRunner(document).run(_read_source(path))

        if args.device == "stream":
            if args.outputfile:
                with open(args.outputfile, "w", encoding="ascii") as out:
                    _write_stream(document, out)
            else:
                _write_stream(document, sys.stdout)
        else:
            outputfile = args.outputfile or get_output_base_name(None, args.inputfiles) + ".pdf"
            document.write(outputfile, compress=args.compress)
            if args.verbose:
                print(f"Wrote {len(document.pages)} page(s) to {outputfile}")
    except (CMForgeError, OSError) as exc:
        print(f"cmforge: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
