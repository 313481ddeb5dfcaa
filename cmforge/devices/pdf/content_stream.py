# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
In-progress content stream of one PDF page.

PageContent is the collaborator TransformationEmitter writes into.  Besides
collecting operator lines it follows the graphics state the way a PDF
consumer would: ``q`` pushes a copy of the CTM, ``Q`` pops it, and every
``cm`` line is concatenated onto the current one (CTM' = M x CTM).
"""

from __future__ import annotations

from decimal import Decimal

from ...core.error import UnbalancedStateError
from ...core.matrix import IDENTITY, OPERATOR_CM, AffineMatrix, _matmult, format_number

OP_SAVE_STATE = "q"
OP_RESTORE_STATE = "Q"


class PageContent:
    def __init__(self, initial_ctm: AffineMatrix = IDENTITY) -> None:
        self.lines: list[str] = []
        self.ctm = initial_ctm
        self._ctm_stack: list[AffineMatrix] = []

    @property
    def depth(self) -> int:
        """Number of unmatched saves."""
        return len(self._ctm_stack)

    @property
    def data(self) -> bytes:
        return "\n".join(self.lines).encode("ascii")

    def push_graphics_state(self) -> None:
        self._ctm_stack.append(self.ctm)
        self.lines.append(OP_SAVE_STATE)

    def pop_graphics_state(self) -> None:
        if not self._ctm_stack:
            raise UnbalancedStateError("graphics state restore without a matching save")
        self.ctm = self._ctm_stack.pop()
        self.lines.append(OP_RESTORE_STATE)

    def append_to_content_stream(self, line: str) -> None:
        operands = line.split()
        if operands and operands[-1] == OPERATOR_CM:
            cm = AffineMatrix(*(Decimal(v) for v in operands[:-1]))
            self.ctm = _matmult(cm, self.ctm)
        self.lines.append(line)

    # Path construction and painting, enough to draw into a transformed space.

    def _append_op(self, operator: str, *operands) -> None:
        self.lines.append(" ".join([format_number(v) for v in operands] + [operator]))

    def move_to(self, x, y) -> None:
        self._append_op("m", x, y)

    def line_to(self, x, y) -> None:
        self._append_op("l", x, y)

    def rectangle(self, x, y, width, height) -> None:
        self._append_op("re", x, y, width, height)

    def stroke(self) -> None:
        self._append_op("S")

    def fill(self) -> None:
        self._append_op("f")

    def stroke_rectangle(self, x, y, width, height) -> None:
        self.rectangle(x, y, width, height)
        self.stroke()

    def close(self) -> None:
        """Refuse to finish a page that still has unmatched saves."""
        if self._ctm_stack:
            raise UnbalancedStateError(
                f"{len(self._ctm_stack)} graphics state save(s) never restored"
            )
