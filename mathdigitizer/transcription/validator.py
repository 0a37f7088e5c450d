"""Validates raw parsed JSON against the transcription response schema."""

from typing import Any

from mathdigitizer.transcription.exceptions import ServiceResponseParseError
from mathdigitizer.transcription.models import BoundingBox, Figure, TranscriptionResult

_BOX_LENGTH = 4


def validate_and_build(data: dict[str, Any]) -> TranscriptionResult:
    """Validate raw parsed JSON and build a TranscriptionResult.

    Box coordinates are kept as received; range and ordering are checked at
    crop time so a sloppy box never discards the transcript.

    Raises:
        ServiceResponseParseError: on any schema violation.
    """
    latex = _require_string(data, "latex")
    html = _require_string(data, "html")
    figures = _build_figures(data.get("figures"))
    return TranscriptionResult(latex=latex, html=html, figures=figures)


def _require_string(data: dict[str, Any], name: str) -> str:
    if name not in data:
        raise ServiceResponseParseError(f"Missing required field: {name}")
    value = data[name]
    if not isinstance(value, str):
        raise ServiceResponseParseError(f"'{name}' must be a string")
    return value


def _build_figures(raw: Any) -> list[Figure] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ServiceResponseParseError("'figures' must be a list")
    return [_build_figure(item, i) for i, item in enumerate(raw)]


def _build_figure(raw: Any, index: int) -> Figure:
    if not isinstance(raw, dict):
        raise ServiceResponseParseError(f"Figure at index {index} must be an object")
    figure_id = raw.get("id")
    if not figure_id or not isinstance(figure_id, str):
        raise ServiceResponseParseError(
            f"Figure at index {index}: 'id' must be a non-empty string"
        )
    source_index = raw.get("source_index")
    if isinstance(source_index, bool) or not isinstance(source_index, int):
        raise ServiceResponseParseError(
            f"Figure at index {index}: 'source_index' must be an integer"
        )
    return Figure(
        id=figure_id,
        source_index=source_index,
        box_2d=_build_box(raw.get("box_2d"), index),
    )


def _build_box(raw: Any, figure_index: int) -> BoundingBox:
    if not isinstance(raw, list) or len(raw) != _BOX_LENGTH:
        raise ServiceResponseParseError(
            f"Figure at index {figure_index}: 'box_2d' must be a list of {_BOX_LENGTH} numbers"
        )
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ServiceResponseParseError(
                f"Figure at index {figure_index}: 'box_2d' values must be numbers"
            )
    return BoundingBox.from_list(raw)
