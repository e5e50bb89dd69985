from shapely.geometry import Point, Polygon, MultiPolygon
from shapely.ops import unary_union
from shapely.prepared import prep
from shapely.validation import make_valid
import numpy as np
import warnings


def to_xy(point):
    """
    Returns `point` as an (x, y) tuple of floats.

    Accepts (x, y) or (x, y, z) sequences, shapely Points and any object exposing
    `x` and `y` attributes, e.g. network nodes.
    """
    if hasattr(point, 'x') and hasattr(point, 'y'):
        return float(point.x), float(point.y)
    # KML and shapely rings may carry a z value
    return float(point[0]), float(point[1])


class Boundary:
    """
    Polygonal border of a district, built one point at a time.

    The first point starts the ring and every following point adds a segment
    from the previous one. The ring is closed implicitly from the last point back
    to the first, repeating the first point is allowed.

    Containment is strict: points on an edge or a vertex are outside. A boundary
    with fewer than three distinct points contains nothing. Self-intersecting rings
    are evaluated with the even-odd rule.

    Attributes
    ----------
    points : list of tuple
        The (x, y) points in insertion order.
    """

    def __init__(self, points=None):
        self.points = []
        self._geometry = None
        self._prepared = None
        self._center = None
        for point in points or []:
            self.add_point(point)

    def add_point(self, point):
        """Appends a point to the ring. `None` is ignored."""
        if point is None:
            return
        self.points.append(to_xy(point))
        self._geometry = None
        self._prepared = None
        self._center = None

    @property
    def geometry(self):
        """Polygon enclosed by the ring, empty if the ring is degenerate."""
        if self._geometry is None:
            self._geometry = self._build_geometry()
        return self._geometry

    def _build_geometry(self):
        if len(set(self.points)) < 3:
            return Polygon()
        polygon = Polygon(self.points)
        if polygon.is_valid:
            return polygon
        # collinear ring, nothing to repair
        if polygon.convex_hull.area == 0:
            return Polygon()
        warnings.warn("Boundary ring is self-intersecting; repairing it with the even-odd rule.")
        repaired = make_valid(polygon)
        parts = getattr(repaired, 'geoms', [repaired])
        polygons = [g for g in parts if isinstance(g, (Polygon, MultiPolygon))]
        if not polygons:
            return Polygon()
        return unary_union(polygons)

    def contains(self, point):
        """
        Tests if `point` lies strictly inside the boundary.
        """
        if self.geometry.is_empty:
            return False
        if self._prepared is None:
            self._prepared = prep(self.geometry)
        return self._prepared.contains(Point(to_xy(point)))

    @property
    def bounds(self):
        """Bounding box of the points as (minx, miny, maxx, maxy)."""
        if not self.points:
            raise ValueError("Empty boundary has no bounds")
        arr = np.asarray(self.points)
        minx, miny = arr.min(axis=0)
        maxx, maxy = arr.max(axis=0)
        return float(minx), float(miny), float(maxx), float(maxy)

    def center(self):
        """
        Center of the bounding box of the boundary (not the centroid).
        """
        if self._center is None:
            minx, miny, maxx, maxy = self.bounds
            self._center = Point((minx + maxx) / 2, (miny + maxy) / 2)
        return self._center

    def __len__(self):
        return len(self.points)

    def __repr__(self):
        return f"Boundary({len(self.points)} points)"
