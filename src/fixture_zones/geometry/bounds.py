from dataclasses import dataclass, replace
from .polygon import Polygon2D


@dataclass(frozen=True, slots=True)
class Bounds:
    """Axis-aligned bounding rectangle in normalized map coordinates."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_points(cls, points) -> "Bounds | None":
        """Bounds of an iterable of (x, y) pairs; None if it is empty."""
        points = list(points)
        if not points:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def from_polygon(cls, polygon) -> "Bounds | None":
        bbox = Polygon2D.from_any(polygon).bounding_box
        return None if bbox is None else cls(*bbox)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    @property
    def is_degenerate(self) -> bool:
        """True when the rectangle has no positive width or height."""
        return self.width <= 0 or self.height <= 0

    def shrink(self, padding: float) -> "Bounds":
        return self.expand(-padding)

    def expand(self, padding: float) -> "Bounds":
        return Bounds(
            self.min_x - padding,
            self.min_y - padding,
            self.max_x + padding,
            self.max_y + padding,
        )

    def clamp(self, lo: float = 0.0, hi: float = 1.0) -> "Bounds":
        """Clamp every edge into [lo, hi]."""
        return replace(
            self,
            min_x=max(lo, self.min_x),
            min_y=max(lo, self.min_y),
            max_x=min(hi, self.max_x),
            max_y=min(hi, self.max_y),
        )

    def clamp_point(self, x: float, y: float) -> tuple[float, float]:
        return (
            max(self.min_x, min(self.max_x, x)),
            max(self.min_y, min(self.max_y, y)),
        )

    def corners(self, closed: bool = False) -> tuple[tuple[float, float], ...]:
        # counter-clockwise from the lower-left corner
        pts = (
            (self.min_x, self.min_y),
            (self.max_x, self.min_y),
            (self.max_x, self.max_y),
            (self.min_x, self.max_y),
        )
        return pts + pts[:1] if closed else pts

    def to_polygon(self, closed: bool = True) -> Polygon2D:
        return Polygon2D(vertices=self.corners(closed=closed))
