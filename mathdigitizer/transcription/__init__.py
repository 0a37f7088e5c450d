from mathdigitizer.transcription.base import BaseTranscriber
from mathdigitizer.transcription.factory import TranscriberFactory
from mathdigitizer.transcription.transcriber import Transcriber

__all__ = ["BaseTranscriber", "Transcriber", "TranscriberFactory"]
