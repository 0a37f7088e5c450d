from mathdigitizer.config.settings import Settings
from mathdigitizer.ingest.docx_adapter import DocxAdapter
from mathdigitizer.ingest.normalizer import InputNormalizer
from mathdigitizer.pdf.factory import PdfRendererFactory
from mathdigitizer.processor.models import Document
from mathdigitizer.processor.pipeline import PipelineContext, PipelineStep
from mathdigitizer.processor.steps import (
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    NormalizeInputStep,
    TranscribeStep,
)
from mathdigitizer.transcription.base import BaseTranscriber
from mathdigitizer.transcription.factory import TranscriberFactory


class Processor:
    """Runs the document pipeline: mark processing -> normalize -> transcribe -> complete.

    Any step failure runs the failed step, which records the error on the
    document, and the exception propagates to the caller.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, document: Document) -> Document:
        context = PipelineContext(document=document)
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            context.error_message = str(exc) or type(exc).__name__
            self._failed_step.run(context)
            raise
        return context.document


def build_processor(
    settings: Settings,
    transcriber: BaseTranscriber | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    normalizer = InputNormalizer(
        pdf_renderer=PdfRendererFactory.create(settings),
        docx_adapter=DocxAdapter(max_images=settings.docx_max_images),
    )
    if transcriber is None:
        transcriber = TranscriberFactory.create(settings)
    steps: list[PipelineStep] = [
        MarkProcessingStep(),
        NormalizeInputStep(normalizer),
        TranscribeStep(transcriber),
        MarkCompletedStep(),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep())
