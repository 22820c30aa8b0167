"""Spheres on the surface of the Earth."""

from __future__ import annotations

from functools import singledispatchmethod

from geocurve.location import Location
from geocurve.types import DistanceType
from geocurve.types import UnsupportedGeometryError


class Sphere:
    """A region of radius ``radius`` meters around ``center``."""

    def __init__(self, center: Location, radius: DistanceType) -> None:
        if radius < 0:
            raise ValueError(f"Sphere radius must be non-negative, got {radius}")
        self.center = center
        self.radius = radius

    def __repr__(self) -> str:
        return f"Sphere({self.center}, radius={self.radius})"

    @singledispatchmethod
    def intersects(self, other: object) -> bool:
        raise UnsupportedGeometryError(
            f"Can't compute intersection of {type(self).__name__} and {type(other).__name__}"
        )

    def distance_from_sphere(self, other: "Sphere") -> DistanceType:
        # Does not account for wrapping at the antimeridian.
        return other.center.distance_from(self.center)

    def intersects_with_sphere(self, other: "Sphere") -> bool:
        return self.distance_from_sphere(other) <= other.radius + self.radius


def _intersects_sphere(self: Sphere, other: Sphere) -> bool:
    return self.intersects_with_sphere(other)


# Sphere is the only supported comparand; everything else hits the default.
vars(Sphere)["intersects"].register(Sphere, _intersects_sphere)


__all__ = ["Sphere"]
