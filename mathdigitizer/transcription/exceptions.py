class TranscriptionError(Exception):
    """Raised when transcription fails."""


class ServiceResponseParseError(TranscriptionError):
    """Raised when the model output is not JSON matching the response schema."""


class NetworkOrServiceError(TranscriptionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
