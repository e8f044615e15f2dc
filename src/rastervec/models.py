"""
Pydantic data models for rastervec.

Drawable primitives, drawing scenes and extraction results all flow through
these validated models so they can be written to and read from JSON/YAML.
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from rastervec.geometry import Coord, distance
from rastervec.raster.rasterize import draw_circle_outline, draw_polyline, draw_segment, fill_area


class Severity(str, Enum):
    """Severity levels for validation checks."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"


class Segment(BaseModel):
    """
    A straight segment between two pixel centers.

    Geometrically undirected; during chain building b is the growth end.
    """
    model_config = ConfigDict(frozen=True)

    kind: Literal["segment"] = "segment"
    a: Coord
    b: Coord

    def __init__(self, a=None, b=None, **data):
        # Segment(a, b) reads like the geometry it describes
        if a is not None:
            data["a"] = a
        if b is not None:
            data["b"] = b
        super().__init__(**data)

    @property
    def is_degenerate(self):
        return self.a == self.b

    @property
    def length(self):
        """Euclidean distance between the endpoints."""
        return distance(self.a, self.b)

    def rasterize(self):
        return draw_segment(self.a, self.b)

    def reversed(self):
        return Segment(self.b, self.a)


class Circle(BaseModel):
    """A circle outline; filled drawing is left to the canvas."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["circle"] = "circle"
    center: Coord
    radius: int = Field(..., ge=0)
    filled: bool = False

    def rasterize(self):
        return draw_circle_outline(self.center, self.radius)


class Triangle(BaseModel):
    """Three vertices; the footprint is the union of its three edges."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["triangle"] = "triangle"
    p1: Coord
    p2: Coord
    p3: Coord
    filled: bool = False

    @property
    def edges(self):
        return [Segment(self.p1, self.p2), Segment(self.p2, self.p3), Segment(self.p3, self.p1)]

    def rasterize(self):
        return draw_polyline([self.p1, self.p2, self.p3], closed=True)


Shape = Annotated[Union[Segment, Circle, Triangle], Field(discriminator="kind")]


class Scene(BaseModel):
    """A canvas size plus the shapes to draw on it."""
    size_x: int = Field(..., ge=0)
    size_y: int = Field(..., ge=0)
    shapes: List[Shape] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class ExtractionReport(BaseModel):
    """Result of one extraction run with per-stage counts."""
    size_x: int
    size_y: int
    foreground_pixels: int = 0
    segments: List[Segment] = Field(default_factory=list)
    orphan_pixels: List[Coord] = Field(default_factory=list)
    base_chain_counts: Dict[str, int] = Field(default_factory=dict)
    merged_chain_count: int = 0
    pool_size: int = 0

    @property
    def segment_count(self):
        return len(self.segments)


class CheckResult(BaseModel):
    """Result of a single validation check."""
    rule_id: str
    severity: Severity
    passed: bool
    message: str
    evidence: dict = Field(default_factory=dict)


class ValidationReport(BaseModel):
    """Complete validation report for an extraction."""
    checks: List[CheckResult] = Field(default_factory=list)

    @property
    def has_errors(self):
        return any(c.severity == Severity.ERROR and not c.passed for c in self.checks)

    @property
    def error_count(self):
        return sum(1 for c in self.checks if c.severity == Severity.ERROR and not c.passed)

    @property
    def warning_count(self):
        return sum(1 for c in self.checks if c.severity == Severity.WARN and not c.passed)


def footprint(shape, filled=None):
    """
    Pixel footprint of any drawable shape.

    filled overrides the shape's own flag; filling uses the scanline fill.
    """
    pixels = shape.rasterize()
    if filled is None:
        filled = getattr(shape, "filled", False)
    if filled:
        pixels = fill_area(pixels)
    return pixels
