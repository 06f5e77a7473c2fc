from __future__ import annotations

import io
import os

import pytest

os.environ.setdefault("OCR_ENABLED", "false")

from PyPDF2 import PdfWriter


def make_pdf(widths):
    """Blank PDF with one page per width; widths identify pages after reordering."""
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=100)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def three_page_pdf() -> bytes:
    return make_pdf([100, 200, 300])


@pytest.fixture
def cat_dog_pages():
    return ["no terms here", "contains cat", "dog and cat both"]
