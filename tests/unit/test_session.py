from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mathdigitizer.assembly.assembler import WordDocumentAssembler
from mathdigitizer.assembly.exporter import WordExporter
from mathdigitizer.config.settings import Settings
from mathdigitizer.processor.models import DocumentStatus
from mathdigitizer.processor.processor import build_processor
from mathdigitizer.session.credentials import NoKeyRequiredProvider
from mathdigitizer.session.session import MISSING_KEY_MESSAGE, DigitizerSession, SessionError
from mathdigitizer.transcription.exceptions import NetworkOrServiceError
from mathdigitizer.transcription.models import TranscriptionResult


def _make_session(
    output_dir: Path, transcriber: MagicMock | None = None
) -> DigitizerSession:
    settings = Settings(_env_file=None, transcription_provider="example")
    return DigitizerSession(
        processor_builder=lambda: build_processor(settings, transcriber=transcriber),
        credentials=NoKeyRequiredProvider(),
        assembler=WordDocumentAssembler(),
        exporter=WordExporter(output_dir=output_dir),
        key_poll_interval_seconds=60,
    )


@pytest.fixture()
def png_path(tmp_path: Path, png_bytes: bytes) -> Path:
    path = tmp_path / "scan.png"
    path.write_bytes(png_bytes)
    return path


class TestDigitizerSessionUpload:
    def test_upload_creates_idle_document(self, tmp_path: Path, png_path: Path) -> None:
        session = _make_session(tmp_path / "out")
        document = session.upload(png_path)
        assert session.current is document
        assert document.status is DocumentStatus.IDLE
        assert document.media_type == "image/png"

    def test_upload_replaces_current_document(self, tmp_path: Path, png_path: Path) -> None:
        session = _make_session(tmp_path / "out")
        first = session.upload(png_path)
        session.process()

        second = session.upload(png_path)

        assert session.current is second
        assert second is not first
        assert second.status is DocumentStatus.IDLE
        assert second.result is None


class TestDigitizerSessionProcess:
    def test_process_without_upload_raises(self, tmp_path: Path) -> None:
        with pytest.raises(SessionError, match="No document uploaded"):
            _make_session(tmp_path).process()

    def test_process_completes(self, tmp_path: Path, png_path: Path) -> None:
        session = _make_session(tmp_path / "out")
        session.upload(png_path)

        document = session.process()

        assert document.status is DocumentStatus.COMPLETED
        assert document.progress == 100
        assert document.result is not None
        assert document.source_images is not None
        assert len(document.source_images) == 1

    def test_process_twice_raises(self, tmp_path: Path, png_path: Path) -> None:
        session = _make_session(tmp_path / "out")
        session.upload(png_path)
        session.process()
        with pytest.raises(SessionError, match="already completed"):
            session.process()

    def test_service_failure_is_recorded(self, tmp_path: Path, png_path: Path) -> None:
        transcriber = MagicMock()
        transcriber.transcribe.side_effect = NetworkOrServiceError("AI provider API error: 503")
        session = _make_session(tmp_path / "out", transcriber)
        session.upload(png_path)

        document = session.process()

        assert document.status is DocumentStatus.ERROR
        assert document.error == "AI provider API error: 503"
        assert document.result is None

    def test_unsupported_input_is_recorded(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        session = _make_session(tmp_path / "out")
        session.upload(path)

        document = session.process()

        assert document.status is DocumentStatus.ERROR
        assert document.error is not None
        assert "Unsupported file type 'text/plain'" in document.error

    def test_missing_key_is_recorded_without_calling_service(
        self, tmp_path: Path, png_path: Path
    ) -> None:
        credentials = MagicMock()
        credentials.has_selected_api_key.return_value = False
        builder = MagicMock()
        session = DigitizerSession(
            processor_builder=builder,
            credentials=credentials,
            assembler=WordDocumentAssembler(),
            exporter=WordExporter(output_dir=tmp_path),
        )
        session.upload(png_path)

        document = session.process()

        builder.assert_not_called()
        assert document.status is DocumentStatus.ERROR
        assert document.error == MISSING_KEY_MESSAGE
        assert session.download() is None

    def test_key_added_later_is_picked_up(self, tmp_path: Path, png_path: Path) -> None:
        credentials = MagicMock()
        credentials.has_selected_api_key.return_value = False
        settings = Settings(_env_file=None, transcription_provider="example")
        session = DigitizerSession(
            processor_builder=lambda: build_processor(settings),
            credentials=credentials,
            assembler=WordDocumentAssembler(),
            exporter=WordExporter(output_dir=tmp_path),
        )
        session.upload(png_path)
        session.process()

        credentials.has_selected_api_key.return_value = True
        session.upload(png_path)

        assert session.process().status is DocumentStatus.COMPLETED

    def test_processor_built_once(self, tmp_path: Path, png_path: Path) -> None:
        builder = MagicMock()
        session = DigitizerSession(
            processor_builder=builder,
            credentials=NoKeyRequiredProvider(),
            assembler=WordDocumentAssembler(),
            exporter=WordExporter(output_dir=tmp_path),
        )
        session.upload(png_path)
        session.process()
        session.upload(png_path)
        session.process()
        builder.assert_called_once()


class TestDigitizerSessionDownload:
    def test_download_before_processing_returns_none(
        self, tmp_path: Path, png_path: Path
    ) -> None:
        session = _make_session(tmp_path / "out")
        session.upload(png_path)
        assert session.download() is None

    def test_download_after_error_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        session = _make_session(tmp_path / "out")
        session.upload(path)
        session.process()
        assert session.download() is None

    def test_download_with_empty_transcript_returns_none(
        self, tmp_path: Path, png_path: Path
    ) -> None:
        transcriber = MagicMock()
        transcriber.transcribe.return_value = TranscriptionResult(latex="", html="")
        session = _make_session(tmp_path / "out", transcriber)
        session.upload(png_path)
        session.process()
        assert session.download() is None

    def test_download_writes_word_file(self, tmp_path: Path, png_path: Path) -> None:
        session = _make_session(tmp_path / "out")
        session.upload(png_path)
        session.process()

        path = session.download()

        assert path == tmp_path / "out" / "scan_PrecisionDigitized.doc"
        content = path.read_text(encoding="utf-8")
        assert content.count("<img ") == 1
        assert "[[FIG_0]]" not in content
        assert "urn:schemas-microsoft-com:office:word" in content


class TestDigitizerSessionLifecycle:
    def test_context_manager_runs_monitor(self, tmp_path: Path) -> None:
        session = _make_session(tmp_path)
        with session:
            assert session._monitor.is_running is True
            assert session.has_key is True
        assert session._monitor.is_running is False

    def test_setup_key_refreshes_status(self, tmp_path: Path) -> None:
        credentials = MagicMock()
        credentials.has_selected_api_key.return_value = False
        session = DigitizerSession(
            processor_builder=MagicMock(),
            credentials=credentials,
            assembler=WordDocumentAssembler(),
            exporter=WordExporter(output_dir=tmp_path),
            key_poll_interval_seconds=60,
        )

        with session:
            assert session.has_key is False
            credentials.has_selected_api_key.return_value = True
            session.setup_key("abc")
            assert session.has_key is True

        credentials.open_select_key.assert_called_once_with("abc")
