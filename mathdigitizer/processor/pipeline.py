from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.processor.models import Document
from mathdigitizer.transcription.models import TranscriptionResult


@dataclass(slots=True)
class PipelineContext:
    document: Document
    images: list[SourceImage] = field(default_factory=list)
    text_context: str = ""
    transcription: TranscriptionResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
