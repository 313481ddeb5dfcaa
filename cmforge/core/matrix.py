# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Six-coefficient affine matrices and their content stream encoding.

A matrix ``[a b c d e f]`` stands for the row-major 3x3 matrix::

    | a  b  0 |
    | c  d  0 |
    | e  f  1 |

and maps a point (x, y) to (a*x + c*y + e, b*x + d*y + f).  This is the
operand order of the PDF ``cm`` operator.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation, localcontext
from typing import NamedTuple, Union

Number = Union[int, float, Decimal]

# digits after the decimal point for every emitted coefficient
COEFFICIENT_PRECISION = 5

# "concatenate matrix" content stream operator
OPERATOR_CM = "cm"


def _is_finite(value: Number) -> bool:
    # ints never overflow; Decimals may exceed float range and stay finite
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    return Decimal(str(value))


class AffineMatrix(NamedTuple):
    a: Number
    b: Number
    c: Number
    d: Number
    e: Number
    f: Number

    def non_finite_positions(self) -> list[int]:
        """Indexes (0 for a .. 5 for f) of coefficients that are NaN or infinite."""
        return [i for i, value in enumerate(self) if not _is_finite(value)]

    def is_finite(self) -> bool:
        return not self.non_finite_positions()


IDENTITY = AffineMatrix(1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


def format_number(value: Number) -> str:
    """
    Fixed-point rendering with exactly COEFFICIENT_PRECISION fractional digits.

    Never uses exponent notation or grouping separators, whatever the
    magnitude.  Negative values that round to zero keep their sign
    (``-0.00000``).
    """
    if isinstance(value, int):
        value = Decimal(value)
    return format(value, f".{COEFFICIENT_PRECISION}f")


def format_cm(matrix: AffineMatrix) -> str:
    """Render ``matrix`` as one ``a b c d e f cm`` content stream line."""
    return " ".join([format_number(value) for value in matrix] + [OPERATOR_CM])


def _matmult(mat1: AffineMatrix, mat2: AffineMatrix) -> AffineMatrix:
    """
    Returns mat1 x mat2 for two matrices in [a b c d e f] form.

    Concatenating ``cm`` onto a CTM is ``_matmult(cm, ctm)``.  Uses
    high-precision decimal arithmetic to keep rounding noise out of long
    chains of concatenations.
    """
    with localcontext() as dctx:
        dctx.prec = 50
        # a CTM past float range turns into inf; inf x 0 tracks as NaN
        dctx.traps[InvalidOperation] = False

        m1_00, m1_01, m1_10, m1_11, m1_20, m1_21 = (_to_decimal(v) for v in mat1)
        m2_00, m2_01, m2_10, m2_11, m2_20, m2_21 = (_to_decimal(v) for v in mat2)

        # [m1_00 m1_01  0 ]   [m2_00 m2_01  0 ]
        # [m1_10 m1_11  0 ] x [m2_10 m2_11  0 ]
        # [m1_20 m1_21  1 ]   [m2_20 m2_21  1 ]
        return AffineMatrix(
            float(m1_00 * m2_00 + m1_01 * m2_10),
            float(m1_00 * m2_01 + m1_01 * m2_11),
            float(m1_10 * m2_00 + m1_11 * m2_10),
            float(m1_10 * m2_01 + m1_11 * m2_11),
            float(m1_20 * m2_00 + m1_21 * m2_10 + m2_20),
            float(m1_20 * m2_01 + m1_21 * m2_11 + m2_21),
        )
