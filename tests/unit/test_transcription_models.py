import dataclasses

import pytest

from mathdigitizer.transcription.models import BoundingBox, TranscriptionResult


class TestBoundingBox:
    def test_from_list_keeps_order(self) -> None:
        box = BoundingBox.from_list([10, 20, 30, 40])
        assert (box.ymin, box.xmin, box.ymax, box.xmax) == (10, 20, 30, 40)

    def test_as_list_round_trips(self) -> None:
        assert BoundingBox.from_list([1.5, 2, 3, 4.25]).as_list() == [1.5, 2, 3, 4.25]

    def test_valid_box(self) -> None:
        assert BoundingBox.from_list([0, 0, 1000, 1000]).is_valid()

    def test_inverted_box_is_invalid(self) -> None:
        assert not BoundingBox.from_list([400, 100, 100, 400]).is_valid()

    def test_zero_height_box_is_invalid(self) -> None:
        assert not BoundingBox.from_list([100, 100, 100, 400]).is_valid()

    def test_out_of_range_box_is_invalid(self) -> None:
        assert not BoundingBox.from_list([-5, 0, 500, 1200]).is_valid()

    def test_clamped_limits_to_grid(self) -> None:
        clamped = BoundingBox.from_list([-5, 0, 500, 1200]).clamped()
        assert clamped.as_list() == [0.0, 0.0, 500.0, 1000.0]
        assert clamped.is_valid()


class TestTranscriptionResult:
    def test_figures_default_to_none(self) -> None:
        assert TranscriptionResult(latex="x", html="y").figures is None

    def test_is_immutable(self) -> None:
        result = TranscriptionResult(latex="x", html="y")
        with pytest.raises(dataclasses.FrozenInstanceError):
            result.latex = "z"  # type: ignore[misc]
