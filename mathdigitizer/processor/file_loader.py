import mimetypes
from pathlib import Path

from mathdigitizer.processor.exceptions import FileReadError
from mathdigitizer.processor.models import EXTENSION_TYPES, Document


def guess_media_type(path: Path) -> str:
    """Declared media type for a local file: known extensions first, then mimetypes."""
    file_type = EXTENSION_TYPES.get(path.suffix.lower())
    if file_type is not None:
        return file_type.value
    guessed, _ = mimetypes.guess_type(path.name)
    return guessed or "application/octet-stream"


class FileLoader:
    """Reads an uploaded file from disk into a fresh idle Document."""

    def load(self, path: Path, media_type: str | None = None) -> Document:
        """Read file bytes and build the Document.

        Raises:
            FileNotFoundError: if the file does not exist.
            FileReadError: if the file exists but cannot be read.
        """
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Failed to read {path}: {exc}") from exc
        return Document(
            file_name=path.name,
            content=content,
            media_type=media_type or guess_media_type(path),
        )
