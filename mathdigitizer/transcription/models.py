from dataclasses import dataclass

NORMALIZED_EXTENT = 1000


@dataclass(frozen=True)
class BoundingBox:
    """Rectangle on the 0-1000 normalized grid, ordered (ymin, xmin, ymax, xmax)."""

    ymin: float
    xmin: float
    ymax: float
    xmax: float

    @classmethod
    def from_list(cls, values: list[float]) -> "BoundingBox":
        ymin, xmin, ymax, xmax = values
        return cls(ymin=ymin, xmin=xmin, ymax=ymax, xmax=xmax)

    def as_list(self) -> list[float]:
        return [self.ymin, self.xmin, self.ymax, self.xmax]

    def clamped(self) -> "BoundingBox":
        """Copy with every coordinate limited to [0, 1000]."""

        def clamp(value: float) -> float:
            return max(0.0, min(float(NORMALIZED_EXTENT), value))

        return BoundingBox(
            ymin=clamp(self.ymin),
            xmin=clamp(self.xmin),
            ymax=clamp(self.ymax),
            xmax=clamp(self.xmax),
        )

    def is_valid(self) -> bool:
        """True when the box lies inside the grid and has positive area."""
        return (
            0 <= self.ymin < self.ymax <= NORMALIZED_EXTENT
            and 0 <= self.xmin < self.xmax <= NORMALIZED_EXTENT
        )


@dataclass(frozen=True)
class Figure:
    """A figure region detected by the model, keyed by its [[FIG_id]] placeholder."""

    id: str
    source_index: int
    box_2d: BoundingBox


@dataclass(frozen=True)
class TranscriptionResult:
    """Structured model output for one document."""

    latex: str
    html: str
    figures: list[Figure] | None = None
