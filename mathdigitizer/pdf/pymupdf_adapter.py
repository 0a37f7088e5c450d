import pymupdf

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.pdf.base import BasePdfRenderer
from mathdigitizer.pdf.exceptions import PdfRenderError


class PyMuPdfAdapter(BasePdfRenderer):
    """Renders PDF pages using PyMuPDF."""

    def render(self, pdf_bytes: bytes) -> list[SourceImage]:
        try:
            matrix = pymupdf.Matrix(self._scale, self._scale)
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                page_count = min(doc.page_count, self._max_pages)
                return [
                    SourceImage(
                        data=doc[i].get_pixmap(matrix=matrix).tobytes(
                            "jpeg", jpg_quality=self._jpeg_quality
                        ),
                        mime_type="image/jpeg",
                    )
                    for i in range(page_count)
                ]
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
