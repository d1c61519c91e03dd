from .polygon import Polygon2D, point_in_polygon
from .bounds import Bounds

__all__ = ["Polygon2D", "point_in_polygon", "Bounds"]
