import pytest

from mathdigitizer.ingest.docx_adapter import DocxAdapter
from mathdigitizer.ingest.exceptions import DocxConversionError


class TestDocxAdapter:
    def test_converts_body_to_html(self, docx_bytes: bytes) -> None:
        result = DocxAdapter().convert(docx_bytes)
        assert result.html is not None
        assert "<h1>Chapter 1</h1>" in result.html
        assert "<p>Question 1. Solve x &lt; 2 and x &gt; 0.</p>" in result.html
        assert "<td>f(x)</td>" in result.html

    def test_text_is_derived_from_html(self, docx_bytes: bytes) -> None:
        text = DocxAdapter().convert(docx_bytes).text_context
        assert "Chapter 1" in text
        assert "Question 1. Solve x < 2 and x > 0." in text

    def test_extracts_embedded_image(self, docx_bytes: bytes, png_bytes: bytes) -> None:
        images = DocxAdapter().convert(docx_bytes).images
        assert len(images) == 1
        assert images[0].mime_type == "image/png"
        assert images[0].data == png_bytes

    def test_limits_to_ten_images(self, docx_with_many_images: bytes) -> None:
        assert len(DocxAdapter().convert(docx_with_many_images).images) == 10

    def test_respects_custom_image_limit(self, docx_with_many_images: bytes) -> None:
        assert len(DocxAdapter(max_images=2).convert(docx_with_many_images).images) == 2

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(DocxConversionError, match="Failed to open"):
            DocxAdapter().convert(b"not a docx")
