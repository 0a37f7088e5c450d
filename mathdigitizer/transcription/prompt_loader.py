from pathlib import Path

from mathdigitizer.transcription.exceptions import TranscriptionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def _read(path: Path, what: str) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TranscriptionError(f"Failed to load {what}: {exc}") from exc


def load_system_prompt(path: Path | None = None) -> str:
    """Load the fixed transcription rules sent as the system instruction.

    Raises:
        TranscriptionError: if the file cannot be read.
    """
    return _read(path or _DEFAULT_PROMPT_DIR / "system_prompt.txt", "system prompt")


def load_user_prompt_template(path: Path | None = None) -> str:
    """Load the user text template; it must contain a {text_context} placeholder."""
    return _read(path or _DEFAULT_PROMPT_DIR / "user_prompt.txt", "user prompt template")


def load_json_schema(path: Path | None = None) -> str:
    """Load the structured-output JSON schema as raw text."""
    return _read(path or _DEFAULT_PROMPT_DIR / "response_schema.json", "JSON schema")
