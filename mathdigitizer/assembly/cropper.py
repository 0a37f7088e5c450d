import io

from PIL import Image, UnidentifiedImageError

from mathdigitizer.ingest.models import SourceImage
from mathdigitizer.logging.logger import Log
from mathdigitizer.transcription.models import NORMALIZED_EXTENT, BoundingBox


def pixel_rect(box: BoundingBox, width: int, height: int) -> tuple[int, int, int, int]:
    """Scale a normalized box to a (left, top, right, bottom) pixel rectangle."""
    return (
        round(box.xmin / NORMALIZED_EXTENT * width),
        round(box.ymin / NORMALIZED_EXTENT * height),
        round(box.xmax / NORMALIZED_EXTENT * width),
        round(box.ymax / NORMALIZED_EXTENT * height),
    )


def crop_image(image: SourceImage, box: BoundingBox) -> SourceImage:
    """Cut the boxed region out of an image and re-encode it as PNG.

    The box is clamped to the 0-1000 grid first. Empty boxes, boxes that
    round to zero pixels, and undecodable images return the input unchanged.
    """
    clamped = box.clamped()
    if not clamped.is_valid():
        Log.warning(f"Degenerate box {box.as_list()}, using the whole image")
        return image

    try:
        with Image.open(io.BytesIO(image.data)) as img:
            left, top, right, bottom = pixel_rect(clamped, img.width, img.height)
            if right <= left or bottom <= top:
                Log.warning(
                    f"Box {box.as_list()} is empty at {img.width}x{img.height}, "
                    "using the whole image"
                )
                return image
            region = img.crop((left, top, right, bottom))
            buf = io.BytesIO()
            region.save(buf, format="PNG")
    except (UnidentifiedImageError, OSError) as exc:
        Log.warning(f"Crop failed for box {box.as_list()}: {exc}")
        return image
    return SourceImage(data=buf.getvalue(), mime_type="image/png")
