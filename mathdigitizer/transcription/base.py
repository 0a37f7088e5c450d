from abc import ABC, abstractmethod

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.models import TranscriptionResult


class BaseTranscriber(ABC):
    """Contract for all transcription services."""

    @abstractmethod
    def transcribe(self, images: list[SourceImage], text_context: str = "") -> TranscriptionResult:
        """Transcribe page images into math markup with figure regions.

        Args:
            images: Ordered page/embedded images; figure source indices refer to it.
            text_context: Plain-text hint extracted from the upload.

        Returns:
            TranscriptionResult with latex, html, and optional figures.

        Raises:
            TranscriptionError: on any failure.
        """
