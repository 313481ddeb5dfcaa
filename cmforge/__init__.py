# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
CMForge - emit PDF coordinate-space transforms (the ``cm`` operator) into
page content streams, with save/restore scoping for nested transforms.
"""

from .core.error import (
    CMForgeError,
    InvalidCoefficientError,
    ScriptSyntaxError,
    UnbalancedStateError,
)
from .core.matrix import AffineMatrix
from .core.requests import RawMatrix, Rotate, Scale, Skew, Translate
from .devices.pdf.content_stream import PageContent
from .devices.pdf.pdf import PDFDocument
from .operators.transformation import TransformationEmitter

__version__ = "0.1.0"
