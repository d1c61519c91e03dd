"""2D polygon representation for zone outlines in normalized map coordinates."""

from collections.abc import Mapping
from dataclasses import dataclass
import numpy as np


def _as_point(p) -> tuple[float, float]:
    """Coerce an (x, y) pair or an {"x", "y"} mapping into a float tuple."""
    if isinstance(p, Mapping):
        return (float(p["x"]), float(p["y"]))
    x, y = p
    return (float(x), float(y))


@dataclass(frozen=True)
class Polygon2D:
    """
    A 2D polygon defined by an ordered vertex sequence.

    Vertices are kept in the order given; the first vertex may be repeated at
    the end to close the ring, which does not change containment results.
    Self-intersecting outlines are accepted but containment is undefined for
    them. Fewer than 3 vertices is tolerated: such a polygon contains nothing.
    """

    vertices: tuple[tuple[float, float], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "vertices", tuple(_as_point(v) for v in self.vertices))

    @classmethod
    def rectangle(cls, x1: float, y1: float, x2: float, y2: float) -> "Polygon2D":
        """Create an axis-aligned rectangle from two opposite corners."""
        return cls(vertices=((x1, y1), (x2, y1), (x2, y2), (x1, y2)))

    @classmethod
    def from_any(cls, arg) -> "Polygon2D":
        """Convert a Polygon2D, a point sequence or None into a Polygon2D."""
        if arg is None:
            return cls()
        if isinstance(arg, cls):
            return arg
        return cls(vertices=tuple(arg))

    @property
    def n_vertices(self) -> int:
        return len(self.vertices)

    @property
    def is_empty(self) -> bool:
        return len(self.vertices) == 0

    @property
    def is_valid(self) -> bool:
        """True if the polygon has enough vertices to enclose an area."""
        return len(self.vertices) >= 3

    @property
    def bounding_box(self) -> tuple[float, float, float, float] | None:
        """Return (x_min, y_min, x_max, y_max), or None for an empty polygon."""
        if self.is_empty:
            return None
        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))

    def contains_point(self, x: float, y: float) -> bool:
        """Check if a point is inside the polygon using ray casting."""
        n = len(self.vertices)
        if n < 3:
            return False
        inside = False
        j = n - 1
        for i in range(n):
            xi, yi = self.vertices[i]
            xj, yj = self.vertices[j]
            if (yi > y) != (yj > y) and yj != yi:
                if x < (xj - xi) * (y - yi) / (yj - yi) + xi:
                    inside = not inside
            j = i
        return inside

    def contains_points(self, points: np.ndarray) -> np.ndarray:
        """
        Check if multiple points are inside the polygon.

        Args:
            points: Array of shape (N, 2) with x, y coordinates

        Returns:
            Boolean array of shape (N,)
        """
        points = np.asarray(points, dtype=float)
        if points.ndim == 1:
            points = points.reshape(-1, 2)

        inside = np.zeros(len(points), dtype=bool)
        n = len(self.vertices)
        if n < 3 or len(points) == 0:
            return inside

        verts = np.array(self.vertices)
        x, y = points[:, 0], points[:, 1]

        j = n - 1
        for i in range(n):
            xi, yi = verts[i]
            xj, yj = verts[j]
            # horizontal edges never cross the ray
            if yi != yj:
                cond1 = (yi > y) != (yj > y)
                x_intersect = (xj - xi) * (y - yi) / (yj - yi) + xi
                inside ^= cond1 & (x < x_intersect)
            j = i

        return inside

    def to_dict(self) -> dict:
        return {"polygon": [{"x": x, "y": y} for x, y in self.vertices]}

    @classmethod
    def from_dict(cls, data: dict) -> "Polygon2D":
        return cls.from_any(data.get("polygon"))


def point_in_polygon(point, polygon) -> bool:
    """
    Return True if `point` lies strictly inside `polygon`.

    `point` is an (x, y) pair or an {"x", "y"} mapping; `polygon` is anything
    Polygon2D.from_any accepts. Points on the boundary may land on either side.
    """
    x, y = _as_point(point)
    return Polygon2D.from_any(polygon).contains_point(x, y)
