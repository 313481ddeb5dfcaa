# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later
from __future__ import annotations


class CMForgeError(Exception):
    """Base class for every error raised by cmforge itself."""


class InvalidCoefficientError(ValueError, CMForgeError):
    """
    One or more of the six matrix coefficients is not a finite number.

    Raised before anything is written to the content stream, so the stream
    never contains a partial ``cm`` line.
    """

    def __init__(self, coefficients, positions) -> None:
        self.coefficients = tuple(coefficients)
        self.positions = tuple(positions)
        names = ", ".join("abcdef"[i] for i in self.positions)
        super().__init__(
            f"non-finite matrix coefficient(s) {names} in {list(self.coefficients)}"
        )


class UnbalancedStateError(CMForgeError):
    """A graphics state restore was requested with no matching save."""


class ScriptSyntaxError(CMForgeError):
    """Malformed transform script."""

    def __init__(self, message: str, line_no: int | None = None) -> None:
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
