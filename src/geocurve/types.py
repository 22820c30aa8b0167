"""
Type definitions and utilities for geocurve.

This module provides type aliases, coordinate constants, the exception
hierarchy and small validation helpers shared by the other modules.
"""

from __future__ import annotations

from typing import Optional
from typing import Sequence
from typing import Tuple
from typing import Union

# Type aliases for common data types
Number = Union[int, float]
Coordinate = Sequence[Number]
Vector = Tuple[float, float]
GridCoordinate = Tuple[int, int]
CurveIndex = int
DistanceType = float

# Geographic coordinate bounds (degrees)
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

# Curve order limits
MIN_ORDER = 0
MAX_ORDER = 32


# Exception types
class GeocurveError(Exception):
    """Base exception for geocurve errors."""

    pass


class InvalidBoundsError(GeocurveError, ValueError):
    """Raised when a box would have a non-positive extent on some axis."""

    pass


class InvalidCurveIndexError(GeocurveError, ValueError):
    """Raised when a curve index cannot be decoded."""

    pass


class InvalidCoordinateError(GeocurveError, ValueError):
    """Raised when coordinates are invalid."""

    pass


class UnsupportedGeometryError(GeocurveError, TypeError):
    """Raised when an operation is requested between unlike geometry kinds."""

    pass


class ConfigurationError(GeocurveError, ValueError):
    """Raised when configuration is invalid."""

    pass


# Utility functions for validation
def validate_latitude(lat: float) -> None:
    """Validate latitude coordinate, excluding the north pole."""
    if not (MIN_LATITUDE <= lat < MAX_LATITUDE):
        raise InvalidCoordinateError(
            f"Latitude must be in [{MIN_LATITUDE}, {MAX_LATITUDE}), got {lat}"
        )


def validate_longitude(lon: float) -> None:
    """Validate longitude coordinate, excluding the antimeridian at +180."""
    if not (MIN_LONGITUDE <= lon < MAX_LONGITUDE):
        raise InvalidCoordinateError(
            f"Longitude must be in [{MIN_LONGITUDE}, {MAX_LONGITUDE}), got {lon}"
        )


def validate_coordinates(lat: float, lon: float) -> None:
    """Validate both latitude and longitude."""
    validate_latitude(lat)
    validate_longitude(lon)


def validate_order(order: int, error: type = ConfigurationError) -> None:
    """Validate a curve order."""
    if isinstance(order, bool) or not isinstance(order, int):
        raise error(f"Order must be an integer, got {order!r}")
    if not (MIN_ORDER <= order <= MAX_ORDER):
        raise error(f"Order must be between {MIN_ORDER} and {MAX_ORDER}, got {order}")


def validate_depth(depth: int, order: int, error: type = ConfigurationError) -> None:
    """Validate a query depth against the curve order it subdivides."""
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise error(f"Depth must be an integer, got {depth!r}")
    if not (0 <= depth <= order):
        raise error(f"Depth must be between 0 and {order}, got {depth}")


def resolve_depth(depth: Optional[int], default: int, order: int) -> int:
    """Return ``depth`` or ``default`` after checking it against ``order``."""
    if depth is None:
        depth = default
    validate_depth(depth, order, error=ValueError)
    return depth


# Constants for common operations
DEFAULT_ORDER = 16
DEFAULT_QUERY_DEPTH = 10
