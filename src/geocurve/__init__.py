"""
geocurve: Hilbert curve spatial indexing for geographic points

geocurve keeps points in a single sequence sorted along a Hilbert
space-filling curve. Because the curve preserves locality, rectangular range
queries become a handful of binary searches instead of a tree walk.

Example usage:
    >>> import geocurve
    >>>
    >>> # Create an index over the whole Earth (longitude, latitude)
    >>> index = geocurve.SpatialIndex.for_earth(order=16)
    >>>
    >>> # Insert some locations, then sort once
    >>> index.insert(geocurve.Location(170.53, -43.89))
    >>> index.insert(geocurve.Location(151.21, -33.85))
    >>> index.sort()
    >>>
    >>> # Find everything inside a box around the South Island
    >>> box = geocurve.Box.from_bounds((166, -48), (180, -34))
    >>> found = index.query(box, depth=10)
    >>> print(f"Found {len(found)} locations")
"""

from __future__ import annotations

import logging

from geocurve.box import Box
from geocurve.config import Config
from geocurve.config import load_config
from geocurve.hilbert import Visit
from geocurve.hilbert import decode
from geocurve.hilbert import encode
from geocurve.hilbert import traverse
from geocurve.index import Point
from geocurve.index import SpatialIndex
from geocurve.location import Location
from geocurve.sphere import Sphere
from geocurve.types import ConfigurationError
from geocurve.types import GeocurveError
from geocurve.types import InvalidBoundsError
from geocurve.types import InvalidCoordinateError
from geocurve.types import InvalidCurveIndexError
from geocurve.types import UnsupportedGeometryError

__version__ = "0.1.0"

# Re-export main classes
__all__ = [
    "Box",
    "Config",
    "ConfigurationError",
    "GeocurveError",
    "InvalidBoundsError",
    "InvalidCoordinateError",
    "InvalidCurveIndexError",
    "Location",
    "Point",
    "SpatialIndex",
    "Sphere",
    "UnsupportedGeometryError",
    "Visit",
    "__version__",
    "decode",
    "encode",
    "load_config",
    "traverse",
]

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Package metadata
__license__ = "MIT"
