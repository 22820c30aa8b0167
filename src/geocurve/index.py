"""
Spatial index over a Hilbert-sorted sequence of points.

Every inserted location is mapped onto a ``2 ** order`` grid spanning the
index bounds and keyed by its curve index. Once the points are sorted, a
rectangular query walks the curve's quadtree, collects the curve-index
ranges of the cells overlapping the query box and binary-searches each range.

Inserting does not sort. Load the points, call :meth:`SpatialIndex.sort`
once, then query::

    >>> index = SpatialIndex.for_earth(order=16)
    >>> index.extend([Location(170.53, -43.89), Location(151.21, -33.85)])
    >>> index.sort()
    >>> index.query(Box.from_bounds((166, -48), (180, -34)), depth=10)
    {Location(longitude=170.53, latitude=-43.89)}
"""

from __future__ import annotations

import bisect
import logging
import math
from operator import attrgetter
from typing import Any
from typing import Iterable
from typing import Iterator
from typing import List
from typing import NamedTuple
from typing import Optional
from typing import Set
from typing import Tuple

from geocurve import hilbert
from geocurve.box import Box
from geocurve.config import Config
from geocurve.config import EARTH_BOUNDS
from geocurve.hilbert import Visit
from geocurve.location import Location
from geocurve.types import Coordinate
from geocurve.types import CurveIndex
from geocurve.types import DEFAULT_ORDER
from geocurve.types import DEFAULT_QUERY_DEPTH
from geocurve.types import DistanceType
from geocurve.types import InvalidCoordinateError
from geocurve.types import MAX_LONGITUDE
from geocurve.types import MIN_LONGITUDE
from geocurve.types import resolve_depth
from geocurve.types import validate_order

logger = logging.getLogger(__name__)

_curve_index = attrgetter("curve_index")


class Point(NamedTuple):
    """An indexed location and its curve index."""

    location: Location
    curve_index: CurveIndex
    value: Any = None


class Node(NamedTuple):
    """A quadtree node selected by a traversal.

    The node covers curve indices ``[curve_index, curve_index + 4 ** remaining_order)``.
    """

    box: Box
    curve_index: CurveIndex
    remaining_order: int

    @property
    def end(self) -> CurveIndex:
        return self.curve_index + (1 << (2 * self.remaining_order))


class SpatialIndex:
    """Points inside ``bounds``, ordered along a Hilbert curve of ``order``."""

    def __init__(self, bounds: Box, order: int = DEFAULT_ORDER, depth: Optional[int] = None) -> None:
        validate_order(order, error=ValueError)

        self._bounds = bounds
        self._order = order
        self._depth = resolve_depth(depth, min(DEFAULT_QUERY_DEPTH, order), order)
        self._points: List[Point] = []
        self._sorted = True

    @classmethod
    def for_earth(cls, order: int = DEFAULT_ORDER, depth: Optional[int] = None) -> "SpatialIndex":
        """Create an index over longitude/latitude in degrees."""
        return cls(EARTH_BOUNDS, order, depth)

    @classmethod
    def from_config(cls, config: Config) -> "SpatialIndex":
        """Create an index from a :class:`~geocurve.config.Config`."""
        return cls(config.bounds, config.order, config.depth)

    def __repr__(self) -> str:
        return f"SpatialIndex(bounds={self._bounds!r}, order={self._order}, count={len(self._points)})"

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    @property
    def bounds(self) -> Box:
        return self._bounds

    @property
    def order(self) -> int:
        return self._order

    @property
    def depth(self) -> int:
        """Default query depth."""
        return self._depth

    @property
    def points(self) -> Tuple[Point, ...]:
        """The indexed points in their current order (curve order once sorted).

        Each :class:`Point` carries its location, curve index and payload; use
        :meth:`locations` for the bare locations in the same order.
        """
        return tuple(self._points)

    @property
    def sorted(self) -> bool:
        """Whether the points are currently in curve order."""
        return self._sorted

    def count(self) -> int:
        return len(self._points)

    def locations(self) -> List[Location]:
        return [point.location for point in self._points]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def curve_index_for(self, location: Coordinate) -> CurveIndex:
        """Compute the curve index of ``location`` within the index bounds."""
        if not self._bounds.include_point(location):
            raise InvalidCoordinateError(
                f"{location} is outside the index bounds {self._bounds!r}"
            )

        scale = 1 << self._order
        x, y = self._bounds.integral_offset(location, scale)

        # Rounding can push a point just below the maximum edge onto the
        # next cell, which does not exist.
        return hilbert.encode(min(x, scale - 1), min(y, scale - 1), self._order)

    def insert(self, location: Location, value: Any = None) -> Point:
        """Append ``location`` to the index. The index is not re-sorted."""
        point = Point(location, self.curve_index_for(location), value)
        self._points.append(point)
        self._sorted = False
        return point

    def extend(self, locations: Iterable[Location]) -> None:
        """Insert many locations. The index is not re-sorted."""
        before = len(self._points)
        for location in locations:
            self.insert(location)
        logger.debug("Inserted %d points", len(self._points) - before)

    def sort(self) -> None:
        """Stable sort of the points by curve index."""
        self._points.sort(key=_curve_index)
        self._sorted = True
        logger.debug("Sorted %d points", len(self._points))

    def reconfigure(self, bounds: Optional[Box] = None, order: Optional[int] = None) -> None:
        """Change the domain or order and recompute every curve index.

        All points must lie inside the new bounds; on failure the index is left
        unchanged. A sorted index is sorted again.
        """
        if order is not None:
            validate_order(order, error=ValueError)

        previous = (self._bounds, self._order)
        self._bounds = bounds if bounds is not None else self._bounds
        self._order = order if order is not None else self._order

        try:
            points = [
                point._replace(curve_index=self.curve_index_for(point.location))
                for point in self._points
            ]
        except InvalidCoordinateError:
            self._bounds, self._order = previous
            raise

        self._points = points
        self._depth = min(self._depth, self._order)

        if self._sorted:
            self.sort()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def traverse(self, box: Box, depth: Optional[int] = None) -> List[Node]:
        """Select the curve cells that may hold points inside ``box``.

        Cells are subdivided down to ``depth`` levels below the index bounds,
        except where the whole cell lies in the grid cells ``box`` spans. The
        returned nodes are disjoint and in increasing curve order.
        """
        depth = resolve_depth(depth, self._depth, self._order)
        nodes: List[Node] = []

        if not box.intersect(self._bounds):
            return nodes

        if depth == 0 or box.include(self._bounds):
            nodes.append(Node(self._bounds, 0, self._order))
            return nodes

        # Remaining order of the nodes where the walk stops.
        floor = self._order - depth

        # Prune on the same integer grid as curve_index_for().
        (min_x, min_y), (max_x, max_y) = self._cell_range(box)

        def visit(cell: Box, curve_index: CurveIndex, remaining: int) -> Visit:
            side = 1 << remaining
            x, y = int(cell.origin[0]), int(cell.origin[1])

            if x > max_x or x + side <= min_x or y > max_y or y + side <= min_y:
                return Visit.SKIP

            inside = min_x <= x and x + side - 1 <= max_x and min_y <= y and y + side - 1 <= max_y

            if remaining == floor or inside:
                nodes.append(Node(self._cell_box(x, y, side), curve_index, remaining))
                return Visit.SKIP

            return Visit.CONTINUE

        # The grid forms the first quadrant of a curve one order higher,
        # which is exactly how encode() lays out the points.
        scale = 1 << self._order
        hilbert.traverse(self._order - 1, visit, (0, 0), (scale, scale))

        return nodes

    def _cell_range(self, box: Box) -> Tuple[Tuple[int, int], Tuple[int, int]]:
        """Inclusive range of grid cells that points inside ``box`` can map to."""
        scale = 1 << self._order

        def clamp(cell: Tuple[int, int]) -> Tuple[int, int]:
            return min(max(cell[0], 0), scale - 1), min(max(cell[1], 0), scale - 1)

        return (
            clamp(self._bounds.integral_offset(box.min, scale)),
            clamp(self._bounds.integral_offset(box.max, scale)),
        )

    def _cell_box(self, x: int, y: int, side: int) -> Box:
        """The part of the bounds covered by ``side`` x ``side`` cells at ``(x, y)``."""
        scale = 1 << self._order
        (origin_x, origin_y), (width, height) = self._bounds.origin, self._bounds.size

        return Box(
            (origin_x + x * width / scale, origin_y + y * height / scale),
            (side * width / scale, side * height / scale),
        )

    def ranges(self, box: Box, depth: Optional[int] = None) -> List[Tuple[CurveIndex, CurveIndex]]:
        """Half-open curve-index ranges covering ``box``, merged where adjacent."""
        ranges: List[Tuple[CurveIndex, CurveIndex]] = []

        for node in self.traverse(box, depth):
            if ranges and ranges[-1][1] == node.curve_index:
                ranges[-1] = (ranges[-1][0], node.end)
            else:
                ranges.append((node.curve_index, node.end))

        return ranges

    def find(self, box: Box, depth: Optional[int] = None) -> List[Point]:
        """Return the points inside ``box`` in curve order.

        The index must be sorted. ``depth`` only trades the number of range
        lookups against the number of candidates checked; the result is the
        same for every depth.
        """
        if not self._sorted:
            logger.warning("Querying an index modified since the last sort(); results may be incomplete")

        ranges = self.ranges(box, depth)
        logger.debug("Query %r spans %d curve ranges", box, len(ranges))

        results: List[Point] = []
        for first, last in ranges:
            start = bisect.bisect_left(self._points, first, key=_curve_index)
            stop = bisect.bisect_left(self._points, last, lo=start, key=_curve_index)

            for point in self._points[start:stop]:
                if box.include_point(point.location):
                    results.append(point)

        return results

    def query(self, box: Box, depth: Optional[int] = None) -> Set[Location]:
        """Return the locations inside ``box``."""
        return {point.location for point in self.find(box, depth)}

    def nearby(
        self,
        location: Location,
        distance: DistanceType,
        depth: Optional[int] = None,
    ) -> List[Tuple[Point, DistanceType]]:
        """Return ``(point, meters)`` pairs within ``distance`` of ``location``.

        Only meaningful for indexes over longitude/latitude; results are
        ordered nearest first.
        """
        coordinates = location.bounding_box(distance)
        (min_lon, max_lon), (min_lat, max_lat) = coordinates

        # Widen the exclusive upper edges so points on the boundary are kept.
        max_lat = math.nextafter(max_lat, math.inf)
        if coordinates.wraps:
            boxes = [
                Box.from_bounds((min_lon, min_lat), (math.nextafter(MAX_LONGITUDE, math.inf), max_lat)),
                Box.from_bounds((MIN_LONGITUDE, min_lat), (math.nextafter(max_lon, math.inf), max_lat)),
            ]
        else:
            boxes = [Box.from_bounds((min_lon, min_lat), (math.nextafter(max_lon, math.inf), max_lat))]

        results: List[Tuple[Point, DistanceType]] = []
        for box in boxes:
            for point in self.find(box, depth):
                meters = location.distance_from(point.location)
                if meters <= distance:
                    results.append((point, meters))

        results.sort(key=lambda result: result[1])
        return results


__all__ = ["Node", "Point", "SpatialIndex"]
