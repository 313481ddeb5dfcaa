# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transform scripts.

A tiny line-oriented language for driving TransformationEmitter from files::

    # rectangle rotated around its corner
    translate 300 300 {
        rotate 30 {
            rectangle 0 0 150 200
            stroke
        }
    }
    showpage

A transform followed by ``{`` is scoped: it is bracketed by q/Q and the
lines up to the matching ``}`` run inside it.  Without ``{`` the transform
stays in effect until an explicit ``grestore``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from ..operators.transformation import TransformationEmitter
from .error import ScriptSyntaxError
from .requests import RawMatrix, Rotate, Scale, Skew, Translate

COMMENT = "#"
OPEN_BLOCK = "{"
CLOSE_BLOCK = "}"
SHOWPAGE = "showpage"

# name -> (operand count, request type)
TRANSFORMS = {
    "rotate": (1, Rotate),
    "translate": (2, Translate),
    "scale": (1, Scale),
    "skew": (2, Skew),
    "matrix": (6, RawMatrix),
}

# name -> (operand count, PageContent method)
PAGE_OPS = {
    "moveto": (2, "move_to"),
    "lineto": (2, "line_to"),
    "rectangle": (4, "rectangle"),
    "stroke": (0, "stroke"),
    "fill": (0, "fill"),
    "gsave": (0, "push_graphics_state"),
    "grestore": (0, "pop_graphics_state"),
}


@dataclass
class Command:
    name: str
    operands: list[float]
    line_no: int
    # statements of a scoped block, None for unscoped commands
    body: Optional[list[Command]] = None


@dataclass
class _Frame:
    commands: list[Command] = field(default_factory=list)
    opener: Optional[Command] = None


def _number(token: str, line_no: int) -> float:
    try:
        value = float(token)
    except ValueError:
        raise ScriptSyntaxError(f"expected a number, got '{token}'", line_no)
    if not math.isfinite(value):
        raise ScriptSyntaxError(f"expected a finite number, got '{token}'", line_no)
    return value


def parse(source: str) -> list[Command]:
    """Parse script text into a list of (possibly nested) commands."""
    stack = [_Frame()]

    for line_no, raw in enumerate(source.splitlines(), start=1):
        tokens = raw.split(COMMENT, 1)[0].split()
        if not tokens:
            continue

        if tokens == [CLOSE_BLOCK]:
            if len(stack) == 1:
                raise ScriptSyntaxError("'}' without a matching '{'", line_no)
            stack.pop()
            continue

        opens = tokens[-1] == OPEN_BLOCK
        if opens:
            tokens = tokens[:-1]
        if not tokens:
            raise ScriptSyntaxError("'{' must follow a transform", line_no)

        name, args = tokens[0].lower(), tokens[1:]
        if name in TRANSFORMS:
            expected = TRANSFORMS[name][0]
        elif name in PAGE_OPS:
            expected = PAGE_OPS[name][0]
        elif name == SHOWPAGE:
            expected = 0
        else:
            raise ScriptSyntaxError(f"unknown command '{tokens[0]}'", line_no)

        if len(args) != expected:
            raise ScriptSyntaxError(
                f"'{name}' takes {expected} operand(s), got {len(args)}", line_no
            )
        if opens and name not in TRANSFORMS:
            raise ScriptSyntaxError(f"'{name}' cannot open a block", line_no)
        if name == SHOWPAGE and len(stack) > 1:
            raise ScriptSyntaxError("'showpage' inside a block", line_no)

        command = Command(name, [_number(t, line_no) for t in args], line_no)
        stack[-1].commands.append(command)
        if opens:
            command.body = []
            stack.append(_Frame(command.body, command))

    if len(stack) > 1:
        raise ScriptSyntaxError("unclosed '{'", stack[-1].opener.line_no)

    return stack[0].commands


class ScriptRunner:
    """Executes parsed commands against the pages of a PDFDocument."""

    def __init__(self, document) -> None:
        self.document = document
        self.page = None
        self.emitter = None

    def _start_page(self) -> None:
        self.page = self.document.new_page()
        self.emitter = TransformationEmitter(self.page)

    def run(self, source: str) -> None:
        self._execute(parse(source))

    def _execute(self, commands: list[Command]) -> None:
        for command in commands:
            if self.page is None:
                self._start_page()

            if command.name == SHOWPAGE:
                # the next command starts a fresh page
                self.page = None
                self.emitter = None
            elif command.name in TRANSFORMS:
                request = TRANSFORMS[command.name][1](*command.operands)
                if command.body is None:
                    self.emitter.apply(request)
                else:
                    self.emitter.apply_scoped(
                        request, lambda body=command.body: self._execute(body)
                    )
            else:
                getattr(self.page, PAGE_OPS[command.name][1])(*command.operands)


def run_script(source: str, document) -> None:
    ScriptRunner(document).run(source)
