import io

import pdfplumber
from pdfplumber.page import Page

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.pdf.base import BasePdfRenderer
from mathdigitizer.pdf.exceptions import PdfRenderError

# pdfplumber resolutions are in DPI; scale 1.0 is the PDF's native 72 DPI
_BASE_DPI = 72


class PdfPlumberAdapter(BasePdfRenderer):
    """Renders PDF pages using pdfplumber (pypdfium2 backend)."""

    def render(self, pdf_bytes: bytes) -> list[SourceImage]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    self._render_page(page) for page in pdf.pages[: self._max_pages]
                ]
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber rendering failed: {exc}") from exc

    def _render_page(self, page: Page) -> SourceImage:
        image = page.to_image(resolution=_BASE_DPI * self._scale).original.convert("RGB")
        buf = io.BytesIO()
        image.save(buf, format="JPEG", quality=self._jpeg_quality)
        return SourceImage(data=buf.getvalue(), mime_type="image/jpeg")
