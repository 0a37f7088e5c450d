from mathdigitizer.ingest.normalizer import InputNormalizer
from mathdigitizer.logging.logger import Log
from mathdigitizer.processor.models import DocumentStatus
from mathdigitizer.processor.pipeline import PipelineContext, PipelineStep
from mathdigitizer.transcription.base import BaseTranscriber


class MarkProcessingStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        document.status = DocumentStatus.PROCESSING
        document.progress = 10
        document.error = None
        Log.info(f"Document {document.file_name} marked as processing")
        return context


class MarkFailedStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        document = context.document
        document.status = DocumentStatus.ERROR
        document.error = context.error_message
        Log.error(f"Document {document.file_name} marked as failed: {context.error_message}")
        return context


class NormalizeInputStep(PipelineStep):
    def __init__(self, normalizer: InputNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        normalized = self._normalizer.normalize(context.document)
        context.images = normalized.images
        context.text_context = normalized.text_context
        context.document.progress = 40
        Log.info(
            f"Normalized {context.document.file_name}: {len(normalized.images)} images, "
            f"{len(normalized.text_context)} chars of context"
        )
        return context


class TranscribeStep(PipelineStep):
    def __init__(self, transcriber: BaseTranscriber) -> None:
        self._transcriber = transcriber

    def run(self, context: PipelineContext) -> PipelineContext:
        context.transcription = self._transcriber.transcribe(
            context.images, context.text_context
        )
        context.document.progress = 90
        return context


class MarkCompletedStep(PipelineStep):
    def run(self, context: PipelineContext) -> PipelineContext:
        if context.transcription is None:
            raise ValueError("PipelineContext.transcription must be set before completion")
        document = context.document
        document.result = context.transcription
        document.source_images = context.images
        document.status = DocumentStatus.COMPLETED
        document.progress = 100
        Log.info(f"Document {document.file_name} completed")
        return context
