# CMForge - PDF Transformation Matrix Emitter
# Copyright (c) 2026 The CMForge Authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
PDF Output Device

Collects PageContent objects and writes them as a PDF file with pypdf.
Each page is a blank page of the document's media size whose /Contents is
the page's content stream, optionally Flate compressed.
"""

import logging

from pypdf import PdfWriter
from pypdf.generic import NameObject, NumberObject, StreamObject

from .content_stream import PageContent

logger = logging.getLogger(__name__)

# Suppress noisy "Multiple definitions in dictionary" warnings from pypdf
logging.getLogger('pypdf').setLevel(logging.ERROR)

# US Letter in PDF points
DEFAULT_PAGE_WIDTH = 612
DEFAULT_PAGE_HEIGHT = 792


class PDFDocument:
    """
    A multi-page document under construction.

    Pages are created with new_page() and drawn into through a
    TransformationEmitter; nothing touches the disk until write().
    """

    def __init__(self, page_width=DEFAULT_PAGE_WIDTH, page_height=DEFAULT_PAGE_HEIGHT):
        """
        Args:
            page_width: Media box width in PDF points
            page_height: Media box height in PDF points
        """
        if page_width <= 0 or page_height <= 0:
            raise ValueError(f"Invalid page size: {page_width}x{page_height}")
        self.page_width = page_width
        self.page_height = page_height
        self.pages: list[PageContent] = []

    def new_page(self) -> PageContent:
        page = PageContent()
        self.pages.append(page)
        return page

    def write(self, file_path, compress=False):
        """
        Write every page to ``file_path``.

        Args:
            file_path: Output file path (or a binary file object)
            compress: Flate encode the content streams

        Raises:
            UnbalancedStateError: If a page has a save with no restore.
        """
        writer = PdfWriter()

        for page in self.pages:
            page.close()

            pdf_page = writer.add_blank_page(width=self.page_width, height=self.page_height)

            content = page.data
            stream = StreamObject()
            stream._data = content
            stream[NameObject('/Length')] = NumberObject(len(content))
            if compress:
                stream = stream.flate_encode()

            pdf_page[NameObject('/Contents')] = writer._add_object(stream)

        if hasattr(file_path, 'write'):
            writer.write(file_path)
        else:
            with open(file_path, 'wb') as f:
                writer.write(f)

        logger.info("PDF written: %d page(s) to %s", len(self.pages), file_path)
