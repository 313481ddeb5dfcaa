# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Rotate, translate, scale and skew the user space of a content stream.

Every transform is written as one ``a b c d e f cm`` line.  The operator
concatenates onto the current transformation matrix, so nested transforms
compose outer-to-inner in emission order.

Each transform has an unscoped form and a ``*_scoped`` form.  The unscoped
form leaves the change in the ambient graphics state; the caller is expected
to save and restore around it::

    page.push_graphics_state()
    emitter.rotate(30)
    page.stroke_rectangle(0, 0, 150, 200)
    page.pop_graphics_state()

The scoped form brackets a block with save/restore, and the restore runs even
if the block raises::

    emitter.translate_scoped(300, 300, lambda: emitter.rotate_scoped(
        30, lambda: page.stroke_rectangle(0, 0, 150, 200)))
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Protocol, TypeVar

from ..core.error import InvalidCoefficientError
from ..core.matrix import AffineMatrix, Number, format_cm
from ..core.requests import Rotate, Scale, Skew, TransformRequest, Translate

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GraphicsStateTarget(Protocol):
    """What the emitter needs from the page it writes into."""

    def push_graphics_state(self) -> None: ...

    def pop_graphics_state(self) -> None: ...

    def append_to_content_stream(self, line: str) -> None: ...


class TransformationEmitter:
    """
    Writes ``cm`` lines into an injected GraphicsStateTarget.

    The target owns the content stream and the graphics state stack; the
    emitter only appends lines to it and, for the scoped forms, pairs every
    push_graphics_state() with exactly one pop_graphics_state().
    """

    def __init__(self, target: GraphicsStateTarget) -> None:
        self.target = target

    # -- generic primitive ------------------------------------------------

    def transformation_matrix(
        self, a: Number, b: Number, c: Number, d: Number, e: Number, f: Number
    ) -> AffineMatrix:
        """
        Concatenate ``[a b c d e f]`` onto the CTM without saving the
        graphics state.  Returns the emitted matrix.

        Generally one would use the rotate, scale, translate and skew
        convenience methods instead of calling this directly.
        """
        return self._emit(AffineMatrix(a, b, c, d, e, f))

    def transformation_matrix_scoped(
        self,
        a: Number,
        b: Number,
        c: Number,
        d: Number,
        e: Number,
        f: Number,
        block: Callable[[], T],
    ) -> T:
        """
        Save the graphics state, concatenate ``[a b c d e f]``, run ``block``
        and restore.  Returns whatever ``block`` returns; an exception from
        ``block`` propagates unchanged after the restore.
        """
        with self._scoped_matrix(AffineMatrix(a, b, c, d, e, f)):
            return block()

    # -- named transforms -------------------------------------------------

    def rotate(self, angle: Number) -> AffineMatrix:
        """Rotate the user space counter-clockwise around (0, 0) by ``angle`` degrees."""
        return self._emit(Rotate(angle).matrix())

    def rotate_scoped(self, angle: Number, block: Callable[[], T]) -> T:
        return self.apply_scoped(Rotate(angle), block)

    def translate(self, dx: Number, dy: Number) -> AffineMatrix:
        """Move the origin of the user space to (dx, dy)."""
        return self._emit(Translate(dx, dy).matrix())

    def translate_scoped(self, dx: Number, dy: Number, block: Callable[[], T]) -> T:
        return self.apply_scoped(Translate(dx, dy), block)

    def scale(self, factor: Number) -> AffineMatrix:
        """Scale the user space uniformly by ``factor``."""
        return self._emit(Scale(factor).matrix())

    def scale_scoped(self, factor: Number, block: Callable[[], T]) -> T:
        return self.apply_scoped(Scale(factor), block)

    def skew(self, angle_a: Number, angle_b: Number) -> AffineMatrix:
        """
        Skew the x axis by ``angle_a`` and the y axis by ``angle_b`` degrees.

        Raises InvalidCoefficientError at odd multiples of 90 degrees.
        """
        return self._emit(Skew(angle_a, angle_b).matrix())

    def skew_scoped(self, angle_a: Number, angle_b: Number, block: Callable[[], T]) -> T:
        return self.apply_scoped(Skew(angle_a, angle_b), block)

    # -- request dispatch -------------------------------------------------

    def apply(self, request: TransformRequest) -> AffineMatrix:
        return self._emit(request.matrix())

    def apply_scoped(self, request: TransformRequest, block: Callable[[], T]) -> T:
        with self._scoped_matrix(request.matrix()):
            return block()

    @contextmanager
    def scoped(self, request: TransformRequest) -> Iterator[AffineMatrix]:
        """
        Context manager form of ``apply_scoped``::

            with emitter.scoped(Rotate(30)):
                page.stroke_rectangle(0, 0, 150, 200)
        """
        with self._scoped_matrix(request.matrix()) as matrix:
            yield matrix

    # -- internals --------------------------------------------------------

    @staticmethod
    def _check(matrix: AffineMatrix) -> str:
        bad = matrix.non_finite_positions()
        if bad:
            raise InvalidCoefficientError(matrix, bad)
        return format_cm(matrix)

    def _emit(self, matrix: AffineMatrix) -> AffineMatrix:
        line = self._check(matrix)
        self.target.append_to_content_stream(line)
        logger.debug("emitted %s", line)
        return matrix

    @contextmanager
    def _scoped_matrix(self, matrix: AffineMatrix) -> Iterator[AffineMatrix]:
        # validate first so a bad matrix leaves no q behind
        line = self._check(matrix)
        self.target.push_graphics_state()
        try:
            self.target.append_to_content_stream(line)
            logger.debug("emitted %s (scoped)", line)
            yield matrix
        finally:
            self.target.pop_graphics_state()
