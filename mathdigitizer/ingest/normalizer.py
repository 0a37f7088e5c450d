from mathdigitizer.ingest.docx_adapter import DocxAdapter
from mathdigitizer.ingest.models import NormalizedInput, SourceImage
from mathdigitizer.logging.logger import Log
from mathdigitizer.pdf.base import BasePdfRenderer
from mathdigitizer.processor.exceptions import UnsupportedInputError
from mathdigitizer.processor.models import Document, FileType

PDF_TEXT_HINT = "[PDF]"
IMAGE_TEXT_HINT = "[IMAGE]"


class InputNormalizer:
    """Turns an uploaded Document into ordered bitmaps plus a text hint."""

    def __init__(self, *, pdf_renderer: BasePdfRenderer, docx_adapter: DocxAdapter) -> None:
        self._pdf_renderer = pdf_renderer
        self._docx_adapter = docx_adapter

    def normalize(self, document: Document) -> NormalizedInput:
        """Dispatch on the declared media type.

        Raises:
            UnsupportedInputError: for any media type outside FileType.
            PdfRenderError: if PDF rendering fails.
            DocxConversionError: if the Word document cannot be read.
        """
        file_type = document.file_type
        if file_type is None:
            raise UnsupportedInputError(
                f"Unsupported file type '{document.media_type}' for {document.file_name}. "
                f"Supported: {[t.value for t in FileType]}"
            )

        if file_type is FileType.PDF:
            images = self._pdf_renderer.render(document.content)
            Log.info(f"Rendered {len(images)} PDF pages from {document.file_name}")
            return NormalizedInput(images=images, text_context=PDF_TEXT_HINT)

        if file_type is FileType.DOCX:
            return self._docx_adapter.convert(document.content)

        mime_type = FileType.JPEG.value if file_type is FileType.JPG else file_type.value
        return NormalizedInput(
            images=[SourceImage(data=document.content, mime_type=mime_type)],
            text_context=IMAGE_TEXT_HINT,
        )
