"""Index configuration and its YAML loader."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from typing import Dict
from typing import Optional
from typing import Union

import yaml

from geocurve.box import Box
from geocurve.types import ConfigurationError
from geocurve.types import DEFAULT_ORDER
from geocurve.types import DEFAULT_QUERY_DEPTH
from geocurve.types import InvalidBoundsError
from geocurve.types import MAX_LATITUDE
from geocurve.types import MAX_LONGITUDE
from geocurve.types import MIN_LATITUDE
from geocurve.types import MIN_LONGITUDE
from geocurve.types import validate_depth
from geocurve.types import validate_order

logger = logging.getLogger(__name__)

EARTH_BOUNDS = Box.from_bounds((MIN_LONGITUDE, MIN_LATITUDE), (MAX_LONGITUDE, MAX_LATITUDE))


class Config:
    """Configuration for a :class:`~geocurve.index.SpatialIndex`.

    ``order`` sets the grid resolution (``2 ** order`` cells per axis),
    ``depth`` the default query depth and ``bounds`` the coordinate domain.
    """

    def __init__(
        self,
        order: int = DEFAULT_ORDER,
        depth: Optional[int] = None,
        bounds: Box = EARTH_BOUNDS,
    ) -> None:
        validate_order(order)
        if depth is None:
            depth = min(DEFAULT_QUERY_DEPTH, order)
        validate_depth(depth, order)

        self._order = order
        self._depth = depth
        self._bounds = bounds

    @classmethod
    def with_order(cls, order: int) -> "Config":
        """Create a configuration with the given curve order."""
        return cls(order=order)

    @property
    def order(self) -> int:
        return self._order

    @order.setter
    def order(self, order: int) -> None:
        validate_order(order)
        validate_depth(self._depth, order)
        self._order = order

    @property
    def depth(self) -> int:
        return self._depth

    @depth.setter
    def depth(self, depth: int) -> None:
        validate_depth(depth, self._order)
        self._depth = depth

    @property
    def bounds(self) -> Box:
        return self._bounds

    @bounds.setter
    def bounds(self, bounds: Box) -> None:
        if not isinstance(bounds, Box):
            raise ConfigurationError(f"Bounds must be a Box, got {bounds!r}")
        self._bounds = bounds

    def __repr__(self) -> str:
        return f"Config(order={self._order}, depth={self._depth}, bounds={self._bounds!r})"


def _parse_bounds(data: Any) -> Box:
    """Convert a ``{min: [x, y], max: [x, y]}`` mapping into a :class:`Box`."""
    if not isinstance(data, dict) or "min" not in data or "max" not in data:
        raise ConfigurationError(f"Bounds must map 'min' and 'max' to [x, y], got {data!r}")

    try:
        min_x, min_y = (float(v) for v in data["min"])
        max_x, max_y = (float(v) for v in data["max"])
        return Box.from_bounds((min_x, min_y), (max_x, max_y))
    except InvalidBoundsError as exc:
        raise ConfigurationError(str(exc)) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid bounds {data!r}: {exc}") from exc


def _parse_config(data: Dict[str, Any]) -> Config:
    """Convert raw ``data`` into :class:`Config`."""
    index_data = data.get("index") or {}
    if not isinstance(index_data, dict):
        raise ConfigurationError(f"'index' section must be a mapping, got {index_data!r}")

    order = index_data.get("order", DEFAULT_ORDER)
    depth = index_data.get("depth")

    bounds = EARTH_BOUNDS
    if "bounds" in index_data:
        bounds = _parse_bounds(index_data["bounds"])

    return Config(order=order, depth=depth, bounds=bounds)


def load_config(path: Union[str, Path]) -> Config:
    """Load configuration from ``path`` and return a :class:`Config`.

    A missing file yields the default configuration.
    """
    path = Path(path)

    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
    else:
        logger.debug("No configuration at %s, using defaults", path)
        raw = {}

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration root must be a mapping, got {type(raw).__name__}")

    return _parse_config(raw)


__all__ = ["Config", "EARTH_BOUNDS", "load_config"]
