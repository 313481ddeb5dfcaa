# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Transform requests.

Each request kind maps deterministically to one AffineMatrix.  Angles are in
degrees; positive rotation is counter-clockwise in a y-up coordinate system.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Union

from .matrix import AffineMatrix, Number, _is_finite


def _reduce_degrees(angle: Number) -> Number:
    """Fold an angle into (-360, 360) before it is converted to radians."""
    if isinstance(angle, Decimal):
        with localcontext() as dctx:
            dctx.prec = max(dctx.prec, angle.adjusted() + 30)
            return angle % 360
    return angle % 360


def _tan_degrees(angle: Number) -> float:
    """tan() of an angle in degrees; infinite at odd multiples of 90."""
    if not _is_finite(angle):
        return math.nan
    angle = _reduce_degrees(angle)
    if abs(angle) % 180 == 90:
        return math.inf
    return math.tan(math.radians(angle))


@dataclass(frozen=True)
class Rotate:
    angle: Number

    def matrix(self) -> AffineMatrix:
        if not _is_finite(self.angle):
            return AffineMatrix(math.nan, math.nan, math.nan, math.nan, 0, 0)
        rad = math.radians(_reduce_degrees(self.angle))
        cos = math.cos(rad)
        sin = math.sin(rad)
        return AffineMatrix(cos, sin, -sin, cos, 0, 0)


@dataclass(frozen=True)
class Translate:
    dx: Number
    dy: Number

    def matrix(self) -> AffineMatrix:
        return AffineMatrix(1, 0, 0, 1, self.dx, self.dy)


@dataclass(frozen=True)
class Scale:
    # uniform only; 0 gives a degenerate matrix, negative mirrors
    factor: Number

    def matrix(self) -> AffineMatrix:
        return AffineMatrix(self.factor, 0, 0, self.factor, 0, 0)


@dataclass(frozen=True)
class Skew:
    angle_a: Number
    angle_b: Number

    def matrix(self) -> AffineMatrix:
        return AffineMatrix(
            1, _tan_degrees(self.angle_a), _tan_degrees(self.angle_b), 1, 0, 0
        )


@dataclass(frozen=True)
class RawMatrix:
    a: Number
    b: Number
    c: Number
    d: Number
    e: Number
    f: Number

    def matrix(self) -> AffineMatrix:
        return AffineMatrix(self.a, self.b, self.c, self.d, self.e, self.f)


TransformRequest = Union[Rotate, Translate, Scale, Skew, RawMatrix]
