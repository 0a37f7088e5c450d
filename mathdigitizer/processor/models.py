from dataclasses import dataclass
from enum import Enum

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.models import TranscriptionResult


class FileType(str, Enum):
    """Media types accepted by the upload surface."""

    PDF = "application/pdf"
    DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    PNG = "image/png"
    JPEG = "image/jpeg"
    JPG = "image/jpg"


EXTENSION_TYPES: dict[str, FileType] = {
    ".pdf": FileType.PDF,
    ".docx": FileType.DOCX,
    ".png": FileType.PNG,
    ".jpg": FileType.JPEG,
    ".jpeg": FileType.JPEG,
}


class DocumentStatus(str, Enum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class Document:
    """The single in-flight upload, mutated in place as processing advances."""

    file_name: str
    content: bytes
    media_type: str
    status: DocumentStatus = DocumentStatus.IDLE
    progress: int = 0
    result: TranscriptionResult | None = None
    error: str | None = None
    source_images: list[SourceImage] | None = None

    @property
    def file_type(self) -> FileType | None:
        """Resolve the declared media type to a supported FileType, if any."""
        try:
            return FileType(self.media_type)
        except ValueError:
            return None

    @property
    def download_name(self) -> str:
        return self.file_name.split(".")[0]
