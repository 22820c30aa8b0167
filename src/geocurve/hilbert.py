"""
Hilbert curve encoding, decoding and traversal.

Quadrants are numbered 0 to 3 in the following order::

    y
    1 | 3 | 2 |
    0 | 0 | 1 |
        0   1  x

The origin is in the lower left and, for the initial rotation, x is the most
rapidly changing axis.

Each level of the curve is drawn in one of four rotations. The comments on
the rotations show which prefix (position along the curve) each quadrant
receives::

    A (left)     B (down)     C (right)    D (up)
    | 3 | 2 |    | 1 | 2 |    | 1 | 0 |    | 3 | 0 |
    | 0 | 1 |    | 0 | 3 |    | 2 | 3 |    | 2 | 1 |

An index of order ``n`` holds ``n + 1`` two-bit prefixes, most significant
first. The initial rotation alternates with the parity of the order so that
leading zero prefixes never change the rotation seen by the significant
ones: ``encode(x, y, n)`` and ``encode(x, y, n + 1)`` are equal.
"""

from __future__ import annotations

import enum
from typing import Callable
from typing import Optional
from typing import Tuple

from geocurve.box import Box
from geocurve.types import Coordinate
from geocurve.types import CurveIndex
from geocurve.types import GridCoordinate
from geocurve.types import InvalidCoordinateError
from geocurve.types import InvalidCurveIndexError
from geocurve.types import Vector


class Rotation(enum.IntEnum):
    """The four orientations of the curve, named after the final step."""

    A = 0  # left
    B = 1  # down
    C = 2  # right
    D = 3  # up


class Visit(enum.Enum):
    """Result of a traversal callback."""

    CONTINUE = "continue"
    SKIP = "skip"


A, B, C, D = Rotation.A, Rotation.B, Rotation.C, Rotation.D

# Maps a quadrant to its prefix under each rotation. Every row is its own
# inverse, so the same table maps a prefix back to its quadrant.
ROTATE = (
    (A, B, C, D),  # A is the identity
    (A, D, C, B),  # Map A onto B.
    (C, D, A, B),  # Map A onto C.
    (C, B, A, D),  # Map A onto D.
)

# Rotation one level down the tree, given the current rotation and prefix:
#
#   Rotation | 0 1 2 3 (prefix)
#          A | B A A D
#          B | A B B C
#          C | D C C B
#          D | C D D A
#
# Prefixes 1 and 2 keep the current rotation, so only columns 0 and 3 are
# stored.
PREFIX0 = (B, A, D, C)
PREFIX3 = (D, C, B, A)

# Offset of each quadrant's lower left cell, in cells of the child level.
QUADRANT_OFFSETS = ((0, 0), (1, 0), (1, 1), (0, 1))

Visitor = Callable[[Box, CurveIndex, int], Optional[Visit]]


def rotate(rotation: int, quadrant: int) -> int:
    """Map ``quadrant`` to its prefix under ``rotation`` (and back)."""
    return ROTATE[rotation][quadrant]


def next_rotation(rotation: int, prefix: int) -> Rotation:
    """Compute the rotation one level down the tree."""
    if prefix == 0:
        return PREFIX0[rotation]
    elif prefix == 3:
        return PREFIX3[rotation]
    else:
        return Rotation(rotation)


def initial_rotation(order: int) -> Rotation:
    """The rotation of the top level of a curve of the given order."""
    return A if order % 2 == 0 else B


def normalized_quadrant(x: int, y: int, bit_offset: int) -> int:
    """Compute which quadrant ``(x, y)`` falls in at ``bit_offset``."""
    mask = 1 << bit_offset

    if y & mask == 0:
        return 0 if x & mask == 0 else 1
    else:
        return 3 if x & mask == 0 else 2


def updated_coordinate_for(quadrant: int, x: int, y: int) -> GridCoordinate:
    """Descend one level into ``quadrant`` from cell ``(x, y)``."""
    dx, dy = QUADRANT_OFFSETS[quadrant]
    return (x << 1) + dx, (y << 1) + dy


def order_of(value: CurveIndex) -> int:
    """The order of the smallest curve holding ``value``."""
    # Zero would come out as -1; the order 0 curve already holds it.
    return max((value.bit_length() + 1) // 2 - 1, 0)


def encode(x: int, y: int, order: int) -> CurveIndex:
    """Compute the curve index of grid cell ``(x, y)``.

    The curve visits bits ``order`` down to 0 of each coordinate, so ``x``
    and ``y`` may lie anywhere in ``[0, 2**(order + 1))``. Cells of a
    ``2**order`` grid always fall in the first quadrant and leave the top
    prefix zero. The result has at most ``2 * (order + 1)`` bits.
    """
    if order < 0:
        raise ValueError(f"Order must be non-negative, got {order}")

    limit = 1 << (order + 1)
    if not (0 <= x < limit and 0 <= y < limit):
        raise InvalidCoordinateError(
            f"Grid coordinate ({x}, {y}) is outside [0, {limit}) for order {order}"
        )

    value = 0
    rotation = initial_rotation(order)

    for i in range(order, -1, -1):
        quadrant = normalized_quadrant(x, y, i)
        prefix = rotate(rotation, quadrant)

        value = (value << 2) | prefix

        rotation = next_rotation(rotation, prefix)

    return value


def decode(value: CurveIndex) -> GridCoordinate:
    """Compute the grid cell of curve index ``value``."""
    if value < 0:
        raise InvalidCurveIndexError(f"Curve index must be non-negative, got {value}")

    x = 0
    y = 0

    order = order_of(value)
    rotation = initial_rotation(order)

    for i in range(order, -1, -1):
        prefix = (value >> (i * 2)) & 0b11

        # ROTATE is self-inverting, so this recovers the quadrant:
        quadrant = rotate(rotation, prefix)

        x, y = updated_coordinate_for(quadrant, x, y)

        rotation = next_rotation(rotation, prefix)

    return x, y


def bounds_for(quadrant: int, origin: Coordinate, size: Coordinate) -> Tuple[Vector, Vector]:
    """Compute the origin and size of ``quadrant`` within a box."""
    half_size = (size[0] * 0.5, size[1] * 0.5)

    if quadrant == 0:
        return (origin[0], origin[1]), half_size
    elif quadrant == 1:
        return (origin[0] + half_size[0], origin[1]), half_size
    elif quadrant == 2:
        return (origin[0] + half_size[0], origin[1] + half_size[1]), half_size
    elif quadrant == 3:
        return (origin[0], origin[1] + half_size[1]), half_size
    else:
        raise ValueError(f"Invalid quadrant for computing bounds {quadrant}")


def traverse(
    order: int,
    visit: Visitor,
    origin: Coordinate = (0, 0),
    size: Coordinate = (1, 1),
) -> None:
    """Walk the quadtree under the curve depth first, in curve order.

    ``visit(box, value, remaining)`` is called for every node below the root.
    ``value`` is the node's first curve index at full resolution and the node
    covers ``[value, value + 4 ** remaining)``. Nodes at ``remaining == 0``
    are leaves. Returning :attr:`Visit.SKIP` prunes the node's subtree; its
    siblings are still visited.
    """
    if order < 0:
        raise ValueError(f"Order must be non-negative, got {order}")

    _traverse(order, initial_rotation(order), 0, origin, size, visit)


def _traverse(
    order: int,
    rotation: Rotation,
    value: CurveIndex,
    origin: Coordinate,
    size: Coordinate,
    visit: Visitor,
) -> None:
    # Prefix order rather than quadrant order, so values come out sorted.
    for prefix in range(4):
        quadrant = rotate(rotation, prefix)

        child_origin, child_size = bounds_for(quadrant, origin, size)
        child_value = (value << 2) | prefix
        child_rotation = next_rotation(rotation, prefix)

        result = visit(Box(child_origin, child_size), child_value << (order * 2), order)

        if order > 0 and result is not Visit.SKIP:
            _traverse(order - 1, child_rotation, child_value, child_origin, child_size, visit)


__all__ = [
    "PREFIX0",
    "PREFIX3",
    "ROTATE",
    "Rotation",
    "Visit",
    "bounds_for",
    "decode",
    "encode",
    "initial_rotation",
    "next_rotation",
    "normalized_quadrant",
    "order_of",
    "rotate",
    "traverse",
    "updated_coordinate_for",
]
