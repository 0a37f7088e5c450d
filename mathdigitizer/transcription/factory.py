from mathdigitizer.config.settings import Settings
from mathdigitizer.transcription.base import BaseTranscriber
from mathdigitizer.transcription.client_base import BaseTranscriptionClient
from mathdigitizer.transcription.example_client_adapter import ExampleClientAdapter
from mathdigitizer.transcription.gemini_client_adapter import GeminiClientAdapter
from mathdigitizer.transcription.openai_client_adapter import OpenAIClientAdapter
from mathdigitizer.transcription.transcriber import Transcriber

SUPPORTED_PROVIDERS = ("example", "gemini", "openai", "openai_compatible")


class TranscriberFactory:
    """Creates the configured transcriber."""

    @classmethod
    def create(cls, settings: Settings) -> BaseTranscriber:
        """Create a transcriber for settings.transcription_provider."""
        provider = settings.transcription_provider.lower()
        return Transcriber(
            client=cls._create_client(provider, settings),
            model=cls.resolve_model_name(provider, settings),
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseTranscriptionClient:
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "gemini":
            return GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.gemini_timeout_seconds,
            )
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
            )
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "transcription_provider=openai_compatible"
                )
            return OpenAIClientAdapter(
                api_key=settings.openai_compatible_api_key,
                timeout_seconds=settings.openai_compatible_timeout_seconds,
                base_url=url,
            )
        raise ValueError(
            f"Unknown transcription provider '{provider}'. "
            f"Choose from: {list(SUPPORTED_PROVIDERS)}"
        )

    @classmethod
    def resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "example": "example",
            "gemini": settings.gemini_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
        }
        return key_map.get(provider, "") or ""
