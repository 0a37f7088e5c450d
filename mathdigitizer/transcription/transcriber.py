"""Multimodal AI transcriber for math documents."""

import json
from pathlib import Path

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.logging.logger import Log
from mathdigitizer.transcription.base import BaseTranscriber
from mathdigitizer.transcription.client_base import BaseTranscriptionClient
from mathdigitizer.transcription.exceptions import ServiceResponseParseError
from mathdigitizer.transcription.models import TranscriptionResult
from mathdigitizer.transcription.prompt_loader import (
    load_json_schema,
    load_system_prompt,
    load_user_prompt_template,
)
from mathdigitizer.transcription.validator import validate_and_build

TEMPERATURE = 0.0


class Transcriber(BaseTranscriber):
    """Makes one structured-output call per document and validates the reply."""

    def __init__(
        self,
        *,
        client: BaseTranscriptionClient,
        model: str,
        system_prompt_path: Path | None = None,
        user_prompt_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._user_prompt_template = load_user_prompt_template(user_prompt_path)
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    def transcribe(self, images: list[SourceImage], text_context: str = "") -> TranscriptionResult:
        user_prompt = self._user_prompt_template.format(text_context=text_context)
        Log.debug(f"Transcription prompt for {len(images)} images:\n{user_prompt}")

        raw_response = self._client.create_completion(
            model=self._model,
            temperature=TEMPERATURE,
            system_prompt=self._system_prompt,
            images=images,
            user_prompt=user_prompt,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        result = validate_and_build(self._parse_json(raw_response))
        Log.info(
            f"Transcription complete: {len(result.latex)} chars, "
            f"{len(result.figures or [])} figures"
        )
        return result

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ServiceResponseParseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ServiceResponseParseError("JSON response must be an object")
        return parsed
