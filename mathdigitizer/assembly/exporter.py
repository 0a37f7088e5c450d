from pathlib import Path

from mathdigitizer.logging.logger import Log

WORD_EXTENSION = ".doc"


def word_file_name(download_name: str, suffix: str) -> str:
    return f"{download_name}{suffix}{WORD_EXTENSION}"


class WordExporter:
    """Writes assembled Word HTML next to the caller, the CLI's stand-in for a browser download."""

    def __init__(self, *, output_dir: Path, suffix: str = "_PrecisionDigitized") -> None:
        self._output_dir = output_dir
        self._suffix = suffix

    def export(self, document_html: str, download_name: str) -> Path:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / word_file_name(download_name, self._suffix)
        path.write_text(document_html, encoding="utf-8")
        Log.info(f"Wrote Word document to {path}")
        return path
