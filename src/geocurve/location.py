"""
WGS84 locations and great-circle helpers.

Distances use the haversine formula on a sphere of radius :data:`R`, the
mean of the WGS84 semi-axes. Bearings are in degrees and distances in meters.
"""

from __future__ import annotations

import math
from typing import Dict
from typing import NamedTuple
from typing import Tuple

from geocurve.types import DistanceType
from geocurve.types import MAX_LATITUDE
from geocurve.types import MAX_LONGITUDE
from geocurve.types import MIN_LATITUDE
from geocurve.types import MIN_LONGITUDE
from geocurve.types import validate_coordinates

# WGS 84 semi-major axis constant in meters
WGS84_A = 6378137.0
# WGS 84 semi-minor axis constant in meters
WGS84_B = 6356752.3

# Earth radius
R = (WGS84_A + WGS84_B) / 2.0

# WGS 84 eccentricity
WGS84_E = 8.1819190842622e-2

# Radians to degrees multiplier, and back
R2D = 180.0 / math.pi
D2R = math.pi / 180.0

MIN_LONGITUDE_RADIANS = MIN_LONGITUDE * D2R
MAX_LONGITUDE_RADIANS = MAX_LONGITUDE * D2R
MIN_LATITUDE_RADIANS = MIN_LATITUDE * D2R
MAX_LATITUDE_RADIANS = MAX_LATITUDE * D2R


class BoundingCoordinates(NamedTuple):
    """Longitude and latitude ranges (degrees) enclosing a circle.

    When the circle crosses the antimeridian the longitude range wraps, and
    ``longitude[0]`` is greater than ``longitude[1]``.
    """

    longitude: Tuple[float, float]
    latitude: Tuple[float, float]

    @property
    def wraps(self) -> bool:
        return self.longitude[0] > self.longitude[1]


class Location(NamedTuple):
    """A WGS84 coordinate on Earth, ordered as ``(longitude, latitude)``.

    Longitude (-180 to 180) is the x axis and latitude (-90 to 90) the y axis,
    so a location can be used directly wherever a 2D coordinate is expected.
    """

    longitude: float
    latitude: float

    @classmethod
    def from_ecef(cls, x: float, y: float, z: float) -> "Location":
        """Convert earth-centered, earth-fixed coordinates to a location."""
        a = WGS84_A
        e = WGS84_E

        b = math.sqrt((a * a) * (1.0 - (e * e)))
        ep = math.sqrt(((a * a) - (b * b)) / (b * b))

        p = math.sqrt((x * x) + (y * y))
        th = math.atan2(a * z, b * p)

        lon = math.atan2(y, x)
        lat = math.atan2(
            (z + ep * ep * b * (math.sin(th) ** 3)),
            (p - e * e * a * (math.cos(th) ** 3)),
        )

        return cls(longitude=lon * R2D, latitude=lat * R2D)

    def __str__(self) -> str:
        return f"Location[{float(self.longitude)}, {float(self.latitude)}]"

    @property
    def valid(self) -> bool:
        return (
            MIN_LONGITUDE <= self.longitude < MAX_LONGITUDE
            and MIN_LATITUDE <= self.latitude < MAX_LATITUDE
        )

    def validate(self) -> "Location":
        """Raise :class:`InvalidCoordinateError` unless :attr:`valid`."""
        validate_coordinates(self.latitude, self.longitude)
        return self

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}

    def bounding_box(self, distance: DistanceType, radius: float = R) -> BoundingCoordinates:
        """Compute the coordinate ranges enclosing all points within ``distance``.

        See http://janmatuschek.de/LatitudeLongitudeBoundingCoordinates
        """
        if distance < 0 or radius < 0:
            raise ValueError("Invalid distance or radius")

        # angular distance in radians on a great circle
        angular_distance = distance / radius

        min_latitude = (self.latitude * D2R) - angular_distance
        max_latitude = (self.latitude * D2R) + angular_distance

        if min_latitude > MIN_LATITUDE_RADIANS and max_latitude < MAX_LATITUDE_RADIANS:
            longitude_delta = math.asin(
                math.sin(angular_distance) / math.cos(self.latitude * D2R)
            )

            min_longitude = (self.longitude * D2R) - longitude_delta
            if min_longitude < MIN_LONGITUDE_RADIANS:
                min_longitude += 2.0 * math.pi

            max_longitude = (self.longitude * D2R) + longitude_delta
            if max_longitude > MAX_LONGITUDE_RADIANS:
                max_longitude -= 2.0 * math.pi
        else:
            # a pole is within the distance
            min_latitude = max(min_latitude, MIN_LATITUDE_RADIANS)
            max_latitude = min(max_latitude, MAX_LATITUDE_RADIANS)

            min_longitude = MIN_LONGITUDE_RADIANS
            max_longitude = MAX_LONGITUDE_RADIANS

        return BoundingCoordinates(
            longitude=(min_longitude * R2D, max_longitude * R2D),
            latitude=(min_latitude * R2D, max_latitude * R2D),
        )

    def to_ecef(self) -> Tuple[float, float, float]:
        """Convert to earth-centered, earth-fixed coordinates in meters."""
        clon = math.cos(self.longitude * D2R)
        slon = math.sin(self.longitude * D2R)
        clat = math.cos(self.latitude * D2R)
        slat = math.sin(self.latitude * D2R)

        n = WGS84_A / math.sqrt(1.0 - WGS84_E * WGS84_E * slat * slat)

        x = n * clat * clon
        y = n * clat * slon
        z = n * (1.0 - WGS84_E * WGS84_E) * slat

        return x, y, z

    def distance_from(self, other: "Location") -> DistanceType:
        """Great-circle distance in meters."""
        return distance(self, other)

    def bearing_from(self, other: "Location") -> float:
        """Initial bearing in degrees from ``other`` towards this location."""
        return bearing(other, self)

    def location_by(self, bearing: float, distance: DistanceType) -> "Location":
        """The location reached by travelling ``distance`` meters on ``bearing``."""
        return destination(self, bearing, distance)

    def __sub__(self, other: "Location") -> DistanceType:  # type: ignore[override]
        return self.distance_from(other)


def distance(a: Location, b: Location) -> DistanceType:
    """Haversine distance in meters between two locations."""
    rlong1 = a.longitude * D2R
    rlat1 = a.latitude * D2R
    rlong2 = b.longitude * D2R
    rlat2 = b.latitude * D2R

    dlon = rlong1 - rlong2
    dlat = rlat1 - rlat2

    h = math.sin(dlat / 2) ** 2 + math.cos(rlat1) * math.cos(rlat2) * math.sin(dlon / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return R * c


def bearing(origin: Location, target: Location) -> float:
    """Initial great-circle bearing in degrees from ``origin`` to ``target``."""
    lon1 = origin.longitude * D2R
    lat1 = origin.latitude * D2R
    lon2 = target.longitude * D2R
    lat2 = target.latitude * D2R

    return math.atan2(
        math.sin(lon2 - lon1) * math.cos(lat2),
        math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1),
    ) * R2D


def destination(location: Location, bearing: float, distance: DistanceType) -> Location:
    """Travel ``distance`` meters from ``location`` on the given ``bearing``."""
    lon1 = location.longitude * D2R
    lat1 = location.latitude * D2R
    angular = distance / R
    theta = bearing * D2R

    lat2 = math.asin(
        math.sin(lat1) * math.cos(angular) + math.cos(lat1) * math.sin(angular) * math.cos(theta)
    )

    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(lat1),
        math.cos(angular) - math.sin(lat1) * math.sin(lat2),
    )

    return Location(lon2 * R2D, lat2 * R2D)


__all__ = [
    "BoundingCoordinates",
    "D2R",
    "Location",
    "R",
    "R2D",
    "WGS84_A",
    "WGS84_B",
    "WGS84_E",
    "bearing",
    "destination",
    "distance",
]
