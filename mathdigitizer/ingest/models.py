import base64
from dataclasses import dataclass, field


@dataclass(frozen=True)
class SourceImage:
    """One encoded page or embedded image sent to the model."""

    data: bytes
    mime_type: str = "image/jpeg"

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass(frozen=True)
class NormalizedInput:
    """Output of the input normalizer: ordered bitmaps plus a text hint."""

    images: list[SourceImage] = field(default_factory=list)
    text_context: str = ""
    html: str | None = None
