import io

import docx
import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _pdf_with_pages(count: int) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for i in range(count):
        c.drawString(72, 720, f"Page {i + 1}: solve $x^2 - 1 = 0$")
        c.showPage()
    c.save()
    return buf.getvalue()


def _image_bytes(width: int, height: int, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(255, 255, 255)).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF."""
    return _pdf_with_pages(1)


@pytest.fixture()
def fifteen_page_pdf_bytes() -> bytes:
    """Generate a 15-page PDF, more than the render limit."""
    return _pdf_with_pages(15)


@pytest.fixture()
def png_bytes() -> bytes:
    """A 200x100 white PNG."""
    return _image_bytes(200, 100)


@pytest.fixture()
def jpeg_bytes() -> bytes:
    """A 200x100 white JPEG."""
    return _image_bytes(200, 100, "JPEG")


@pytest.fixture()
def docx_bytes(png_bytes: bytes) -> bytes:
    """A Word document with a heading, a paragraph, a table and one picture."""
    document = docx.Document()
    document.add_heading("Chapter 1", level=1)
    document.add_paragraph("Question 1. Solve x < 2 and x > 0.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "x"
    table.rows[0].cells[1].text = "f(x)"
    document.add_picture(io.BytesIO(png_bytes))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_with_many_images() -> bytes:
    """A Word document holding twelve pictures."""
    document = docx.Document()
    for i in range(12):
        document.add_paragraph(f"Figure {i}")
        document.add_picture(io.BytesIO(_image_bytes(20 + i, 20)))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()
