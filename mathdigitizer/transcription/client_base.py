from abc import ABC, abstractmethod

from mathdigitizer.ingest.models import SourceImage


class BaseTranscriptionClient(ABC):
    """Contract for provider-specific multimodal AI clients."""

    @abstractmethod
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
        """Send images followed by the user text; return the raw response text.

        Raises:
            NetworkOrServiceError: when the provider call itself fails.
            ServiceResponseParseError: when the provider returns no content.
        """
