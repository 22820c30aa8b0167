"""
Axis-aligned two dimensional boxes.

A box is described by its ``origin`` (the minimum corner) and its ``size``.
Containment is half-open: the minimum edges belong to the box and the maximum
edges do not, so adjacent grid cells never share a point.
"""

from __future__ import annotations

import math
from typing import List

from geocurve.types import Coordinate
from geocurve.types import GridCoordinate
from geocurve.types import InvalidBoundsError
from geocurve.types import Vector


def _vector(value: Coordinate) -> Vector:
    x, y = value
    return (x, y)


class Box:
    """An immutable axis-aligned rectangle."""

    __slots__ = ("_origin", "_size", "_max")

    def __init__(self, origin: Coordinate, size: Coordinate) -> None:
        origin = _vector(origin)
        size = _vector(size)

        for i in range(2):
            if not size[i] > 0:
                raise InvalidBoundsError(
                    f"Box size must be positive on both axes, got {size}"
                )

        self._origin = origin
        self._size = size
        self._max = (origin[0] + size[0], origin[1] + size[1])

    @classmethod
    def from_bounds(cls, min: Coordinate, max: Coordinate) -> "Box":
        """Create a box spanning ``min`` to ``max``."""
        min = _vector(min)
        max = _vector(max)

        for i in range(2):
            if max[i] <= min[i]:
                raise InvalidBoundsError(
                    f"Box maximum {max} must exceed minimum {min} on both axes"
                )

        box = cls(min, (max[0] - min[0], max[1] - min[1]))
        # Keep the caller's maximum exactly; origin + size may round.
        box._max = max
        return box

    @property
    def origin(self) -> Vector:
        return self._origin

    @property
    def size(self) -> Vector:
        return self._size

    @property
    def min(self) -> Vector:
        return self._origin

    @property
    def max(self) -> Vector:
        return self._max

    @property
    def center(self) -> Vector:
        return (
            self._origin[0] + self._size[0] / 2,
            self._origin[1] + self._size[1] / 2,
        )

    def __repr__(self) -> str:
        return f"Box({self.min} -> {self.max})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Box):
            return NotImplemented
        return self._origin == other._origin and self._size == other._size

    def __hash__(self) -> int:
        return hash((self._origin, self._size))

    def corners(self) -> List[Vector]:
        """Return the four corners, counter-clockwise from the origin."""
        origin = self._origin
        max = self._max

        return [
            origin,
            (max[0], origin[1]),
            max,
            (origin[0], max[1]),
        ]

    def midpoints(self) -> List[Vector]:
        """Return the midpoints of the bottom, right, top and left edges."""
        origin = self._origin
        size = self._size

        return [
            (origin[0] + size[0] / 2, origin[1]),
            (origin[0] + size[0], origin[1] + size[1] / 2),
            (origin[0] + size[0] / 2, origin[1] + size[1]),
            (origin[0], origin[1] + size[1] / 2),
        ]

    def include_point(self, point: Coordinate) -> bool:
        """Whether ``point`` lies inside the box, excluding the maximum edges."""
        for i in range(2):
            if point[i] < self._origin[i] or point[i] >= self._max[i]:
                return False

        return True

    def include(self, other: "Box") -> bool:
        """Whether both corners of ``other`` lie inside this box.

        The maximum corner of ``other`` is tested against the exclusive upper
        bound, so a box sharing this box's maximum is not included.
        """
        return self.include_point(other.min) and self.include_point(other.max)

    def intersect(self, other: "Box") -> bool:
        """Whether the boxes overlap or touch."""
        for i in range(2):
            # Separating axis: if other lies entirely past either side on this
            # axis the boxes cannot intersect.
            if other.min[i] > self._max[i] or other.max[i] < self._origin[i]:
                return False

        return True

    def integral_offset(self, coordinate: Coordinate, scale: int) -> GridCoordinate:
        """Map ``coordinate`` onto a ``scale`` x ``scale`` integer grid over the box."""
        x, y = (
            math.floor((coordinate[i] - self._origin[i]) / self._size[i] * scale)
            for i in range(2)
        )
        return x, y


__all__ = ["Box"]
