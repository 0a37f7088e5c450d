import io

import pytest
from PIL import Image

from mathdigitizer.assembly.cropper import crop_image, pixel_rect
from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.transcription.models import BoundingBox


def _image(width: int, height: int) -> SourceImage:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 10, 10)).save(buf, format="JPEG")
    return SourceImage(data=buf.getvalue(), mime_type="image/jpeg")


def _size(image: SourceImage) -> tuple[int, int]:
    with Image.open(io.BytesIO(image.data)) as img:
        return img.size


class TestPixelRect:
    def test_scales_to_pixels(self) -> None:
        rect = pixel_rect(BoundingBox(100, 200, 500, 600), width=1000, height=2000)
        assert rect == (200, 200, 600, 1000)


class TestCropImage:
    @pytest.mark.parametrize(
        ("box", "width", "height"),
        [
            ([100, 100, 400, 400], 800, 600),
            ([0, 0, 1000, 1000], 123, 457),
            ([250, 10, 260, 990], 1224, 1584),
            ([333, 333, 667, 667], 97, 31),
        ],
    )
    def test_cropped_size_matches_box(self, box: list[float], width: int, height: int) -> None:
        ymin, xmin, ymax, xmax = box
        cropped = crop_image(_image(width, height), BoundingBox.from_list(box))

        out_width, out_height = _size(cropped)
        assert abs(out_width - (xmax - xmin) / 1000 * width) <= 1
        assert abs(out_height - (ymax - ymin) / 1000 * height) <= 1

    def test_output_is_png(self) -> None:
        cropped = crop_image(_image(100, 100), BoundingBox(0, 0, 500, 500))
        assert cropped.mime_type == "image/png"
        with Image.open(io.BytesIO(cropped.data)) as img:
            assert img.format == "PNG"

    def test_out_of_range_box_is_clamped(self) -> None:
        cropped = crop_image(_image(200, 100), BoundingBox(-50, 500, 500, 1200))
        assert _size(cropped) == (100, 50)

    def test_inverted_box_returns_original(self) -> None:
        original = _image(200, 100)
        assert crop_image(original, BoundingBox(400, 100, 100, 400)) is original

    def test_zero_area_box_returns_original(self) -> None:
        original = _image(200, 100)
        assert crop_image(original, BoundingBox(100, 100, 100, 400)) is original

    def test_box_rounding_to_no_pixels_returns_original(self) -> None:
        original = _image(10, 10)
        assert crop_image(original, BoundingBox(100, 100, 101, 101)) is original

    def test_undecodable_image_returns_original(self) -> None:
        original = SourceImage(data=b"not an image")
        assert crop_image(original, BoundingBox(0, 0, 500, 500)) is original
