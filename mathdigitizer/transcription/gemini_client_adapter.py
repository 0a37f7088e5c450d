import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.client_base import BaseTranscriptionClient
from mathdigitizer.transcription.exceptions import (
    NetworkOrServiceError,
    ServiceResponseParseError,
)


class GeminiClientAdapter(BaseTranscriptionClient):
    """Transcription client built on the Google GenAI SDK."""

    def __init__(self, *, api_key: str, timeout_seconds: int) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=timeout_seconds * 1000),
        )

    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        images: list[SourceImage],
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        parts = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type)
            for image in images
        ]
        parts.append(types.Part.from_text(text=user_prompt))
        try:
            response = self._client.models.generate_content(
                model=model,
                contents=parts,
                config=types.GenerateContentConfig(
                    system_instruction=system_prompt,
                    response_mime_type="application/json",
                    response_json_schema=json_schema,
                    temperature=temperature,
                ),
            )
        except httpx.TransportError as exc:
            raise NetworkOrServiceError(f"AI provider network error: {exc}") from exc
        except genai_errors.APIError as exc:
            raise NetworkOrServiceError(f"AI provider API error: {exc}") from exc

        text = response.text
        if not text:
            raise ServiceResponseParseError("AI returned empty response")
        return text
