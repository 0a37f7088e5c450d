import httpx
import openai

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.client_base import BaseTranscriptionClient
from mathdigitizer.transcription.exceptions import (
    NetworkOrServiceError,
    ServiceResponseParseError,
)


class OpenAIClientAdapter(BaseTranscriptionClient):
    """Transcription client built on the OpenAI-compatible chat API with image inputs."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        content: list[dict[str, object]] = [
            {"type": "image_url", "image_url": {"url": image.to_data_url()}}
            for image in images
        ]
        content.append({"type": "text", "text": user_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "transcription_result",
                        # strict mode cannot express the optional "figures" field
                        "strict": False,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": content},
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise NetworkOrServiceError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise NetworkOrServiceError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ServiceResponseParseError("AI returned no choices")
        text = response.choices[0].message.content
        if text is None:
            raise ServiceResponseParseError("AI returned empty response")
        return text
