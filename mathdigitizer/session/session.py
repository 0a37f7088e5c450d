from collections.abc import Callable
from pathlib import Path
from types import TracebackType

from mathdigitizer.assembly.assembler import WordDocumentAssembler
from mathdigitizer.assembly.exporter import WordExporter
from mathdigitizer.logging.logger import Log
from mathdigitizer.processor.file_loader import FileLoader
from mathdigitizer.processor.models import Document, DocumentStatus
from mathdigitizer.processor.processor import Processor
from mathdigitizer.session.credentials import BaseCredentialProvider
from mathdigitizer.session.key_monitor import KeyStatusMonitor


MISSING_KEY_MESSAGE = (
    "SETUP API KEY: no model access key configured, run `mathdigitizer setup-key`"
)


class SessionError(Exception):
    """Raised when a session action is not valid in the current document state."""


class DigitizerSession:
    """Single-document workflow: upload -> process -> download.

    A new upload replaces the current document. The key status monitor runs
    for as long as the session is open.
    """

    def __init__(
        self,
        *,
        processor_builder: Callable[[], Processor],
        credentials: BaseCredentialProvider,
        assembler: WordDocumentAssembler,
        exporter: WordExporter,
        file_loader: FileLoader | None = None,
        key_poll_interval_seconds: float = 2.0,
    ) -> None:
        self._processor_builder = processor_builder
        self._processor: Processor | None = None
        self._credentials = credentials
        self._assembler = assembler
        self._exporter = exporter
        self._file_loader = file_loader or FileLoader()
        self._monitor = KeyStatusMonitor(credentials, key_poll_interval_seconds)
        self.current: Document | None = None

    @property
    def has_key(self) -> bool:
        return self._monitor.is_ready

    def open(self) -> None:
        self._monitor.start()

    def close(self) -> None:
        self._monitor.stop()

    def setup_key(self, api_key: str) -> None:
        self._credentials.open_select_key(api_key)
        self._monitor.refresh()

    def upload(self, path: Path, media_type: str | None = None) -> Document:
        """Replace the current document with a fresh idle one read from path."""
        self.current = self._file_loader.load(path, media_type)
        Log.info(
            f"Uploaded {self.current.file_name} ({self.current.media_type}, "
            f"{len(self.current.content)} bytes)"
        )
        return self.current

    def process(self) -> Document:
        """Run the pipeline on the current document.

        Failures are not raised: they end up in document.status and document.error.
        """
        document = self._require_document()
        if document.status is not DocumentStatus.IDLE:
            raise SessionError(
                f"Document {document.file_name} is already {document.status.value}; "
                "upload it again to reprocess"
            )
        if not self._monitor.refresh():
            document.status = DocumentStatus.ERROR
            document.error = MISSING_KEY_MESSAGE
            Log.error(f"Processing {document.file_name} skipped: {MISSING_KEY_MESSAGE}")
            return document
        try:
            self._get_processor().process(document)
        except Exception as exc:
            Log.exception(f"Processing {document.file_name} failed: {exc}")
            if document.status is not DocumentStatus.ERROR:
                document.status = DocumentStatus.ERROR
                document.error = str(exc) or type(exc).__name__
        return document

    def download(self) -> Path | None:
        """Assemble the completed transcript with cropped figures and write the .doc file.

        Returns None when there is nothing to download.
        """
        document = self._require_document()
        result = document.result
        if document.status is not DocumentStatus.COMPLETED or result is None:
            return None
        if not result.latex or document.source_images is None:
            return None
        document_html = self._assembler.assemble(
            result.latex, document.source_images, result.figures
        )
        return self._exporter.export(document_html, document.download_name)

    def _require_document(self) -> Document:
        if self.current is None:
            raise SessionError("No document uploaded")
        return self.current

    def _get_processor(self) -> Processor:
        if self._processor is None:
            self._processor = self._processor_builder()
        return self._processor

    def __enter__(self) -> "DigitizerSession":
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
