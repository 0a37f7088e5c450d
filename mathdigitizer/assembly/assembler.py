"""Builds a Word-compatible HTML document from a transcript and its figures."""

import html
import re

from mathdigitizer.assembly.cropper import crop_image
from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.logging.logger import Log
from mathdigitizer.transcription.models import Figure

FIGURE_PLACEHOLDER = re.compile(r"\[\[(FIG_\w+)\]\]")

EMPTY_LINE_HTML = "<p>&nbsp;</p>"

_LINE_STYLE = (
    "margin:0 0 8pt 0; font-family:'Times New Roman', serif; "
    "font-size:13pt; line-height:1.5;"
)
_FIGURE_TEMPLATE = (
    '<div style="text-align:center;margin:15pt 0;">'
    '<img src="{src}" style="max-width:400pt; height:auto; border:0.5pt solid #eee;" />'
    "</div>"
)
_WORD_SHELL = (
    "<html xmlns:o='urn:schemas-microsoft-com:office:office' "
    "xmlns:w='urn:schemas-microsoft-com:office:word' "
    "xmlns='http://www.w3.org/TR/REC-html40'>"
    "<head><meta charset='utf-8'>"
    "<style>body {{ font-family: 'Times New Roman', serif; }}</style></head>"
    "<body>{body}</body></html>"
)


class WordDocumentAssembler:
    """Inlines cropped figures into the transcript and wraps it for Word."""

    def __init__(self, *, fallback_template: str = "[Figure {figure_id}]") -> None:
        self._fallback_template = fallback_template

    def assemble(
        self,
        transcript: str,
        source_images: list[SourceImage],
        figures: list[Figure] | None,
    ) -> str:
        cropped = self.crop_figures(source_images, figures or [])
        body = "".join(self._render_line(line, cropped) for line in transcript.split("\n"))
        return _WORD_SHELL.format(body=body)

    @staticmethod
    def crop_figures(
        source_images: list[SourceImage], figures: list[Figure]
    ) -> dict[str, SourceImage]:
        """Crop each figure whose source index points at an existing image."""
        cropped: dict[str, SourceImage] = {}
        for figure in figures:
            if not 0 <= figure.source_index < len(source_images):
                Log.warning(
                    f"Figure {figure.id} references missing image {figure.source_index} "
                    f"({len(source_images)} available)"
                )
                continue
            cropped[figure.id] = crop_image(source_images[figure.source_index], figure.box_2d)
        Log.info(f"Cropped {len(cropped)} of {len(figures)} figures")
        return cropped

    def _render_line(self, line: str, cropped: dict[str, SourceImage]) -> str:
        stripped = line.strip()
        if not stripped:
            return EMPTY_LINE_HTML

        pieces: list[str] = []
        position = 0
        for match in FIGURE_PLACEHOLDER.finditer(stripped):
            pieces.append(html.escape(stripped[position : match.start()], quote=False))
            pieces.append(self._render_figure(match.group(1), cropped))
            position = match.end()
        pieces.append(html.escape(stripped[position:], quote=False))
        return f'<p style="{_LINE_STYLE}">{"".join(pieces)}</p>'

    def _render_figure(self, figure_id: str, cropped: dict[str, SourceImage]) -> str:
        image = cropped.get(figure_id)
        if image is None:
            return html.escape(self._fallback_template.format(figure_id=figure_id), quote=False)
        return _FIGURE_TEMPLATE.format(src=image.to_data_url())
