from abc import ABC, abstractmethod

from mathdigitizer.ingest.models import SourceImage


class BasePdfRenderer(ABC):
    """Contract for all PDF page rasterization adapters."""

    def __init__(self, *, max_pages: int = 10, scale: float = 2.0, jpeg_quality: int = 80) -> None:
        self._max_pages = max_pages
        self._scale = scale
        self._jpeg_quality = jpeg_quality

    @abstractmethod
    def render(self, pdf_bytes: bytes) -> list[SourceImage]:
        """Render the leading pages of a PDF to JPEG images.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One image per page, in page order, at most max_pages long.

        Raises:
            PdfRenderError: if rendering fails for any reason.
        """
