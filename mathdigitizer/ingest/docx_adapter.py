"""Word document conversion: body to HTML, embedded images, and a text hint."""

import html
import io

import docx
from bs4 import BeautifulSoup
from docx.document import Document as DocxDocument
from docx.table import Table
from docx.text.paragraph import Paragraph
from PIL import Image, UnidentifiedImageError

from mathdigitizer.ingest.exceptions import DocxConversionError
from mathdigitizer.ingest.models import NormalizedInput, SourceImage
from mathdigitizer.logging.logger import Log

# formats the AI services accept as inline image parts
_PASSTHROUGH_TYPES = frozenset({"image/png", "image/jpeg", "image/webp"})


class DocxAdapter:
    """Converts a .docx upload into HTML, embedded images, and plain text."""

    def __init__(self, *, max_images: int = 10) -> None:
        self._max_images = max_images

    def convert(self, docx_bytes: bytes) -> NormalizedInput:
        try:
            document = docx.Document(io.BytesIO(docx_bytes))
        except Exception as exc:
            raise DocxConversionError(f"Failed to open Word document: {exc}") from exc

        images = self._extract_images(document)
        body_html = self._to_html(document)
        text = BeautifulSoup(body_html, "html.parser").get_text("\n", strip=True)
        Log.info(
            f"Converted Word document: {len(text)} chars, {len(images)} images"
        )
        return NormalizedInput(images=images, text_context=text, html=body_html)

    def _to_html(self, document: DocxDocument) -> str:
        blocks: list[str] = []
        for item in document.iter_inner_content():
            if isinstance(item, Paragraph):
                blocks.append(self._paragraph_html(item))
            elif isinstance(item, Table):
                blocks.append(self._table_html(item))
        return "".join(block for block in blocks if block)

    @staticmethod
    def _paragraph_html(paragraph: Paragraph) -> str:
        text = html.escape(paragraph.text)
        if not text:
            return ""
        style_name = paragraph.style.name if paragraph.style is not None else ""
        if style_name.startswith("Heading ") and style_name[-1].isdigit():
            level = min(int(style_name[-1]), 6)
            return f"<h{level}>{text}</h{level}>"
        return f"<p>{text}</p>"

    @staticmethod
    def _table_html(table: Table) -> str:
        rows = []
        for row in table.rows:
            cells = "".join(f"<td>{html.escape(cell.text)}</td>" for cell in row.cells)
            rows.append(f"<tr>{cells}</tr>")
        return f"<table>{''.join(rows)}</table>"

    def _extract_images(self, document: DocxDocument) -> list[SourceImage]:
        """Collect embedded images in body order, including those inside tables."""
        images: list[SourceImage] = []
        related = document.part.related_parts
        for rid in document.element.body.xpath(".//a:blip/@r:embed"):
            if len(images) >= self._max_images:
                break
            part = related.get(rid)
            blob = getattr(part, "blob", None)
            if not blob:
                continue
            image = self._to_source_image(blob, (part.content_type or "").lower())
            if image is not None:
                images.append(image)
        return images

    @staticmethod
    def _to_source_image(blob: bytes, content_type: str) -> SourceImage | None:
        if content_type in _PASSTHROUGH_TYPES:
            return SourceImage(data=blob, mime_type=content_type)
        try:
            with Image.open(io.BytesIO(blob)) as img:
                buf = io.BytesIO()
                img.convert("RGBA").save(buf, format="PNG")
        except (UnidentifiedImageError, OSError) as exc:
            Log.warning(f"Skipping embedded image of type {content_type!r}: {exc}")
            return None
        return SourceImage(data=buf.getvalue(), mime_type="image/png")
