"""Coordinate tree traversal for GeoJSON ``coordinates`` arrays.

GeoJSON nests positions to a depth that depends on the geometry type
(Point: 0, LineString: 1, Polygon: 2, MultiPolygon: 3). Every consumer in
the pipeline (reprojection, validation, vertex counting, bounding boxes)
walks the tree through :func:`map_positions` so the nesting rules live in
one place.
"""

import math
from collections.abc import Callable
from numbers import Real
from typing import Any

Position = tuple[float, float]


def _is_leaf(node: Any) -> bool:
    """A node is a leaf when it is not a sequence of sequences.

    Empty arrays and scalars count as leaves so malformed trees still
    terminate and surface as invalid positions.
    """
    if not isinstance(node, (list, tuple)):
        return True
    return len(node) == 0 or not isinstance(node[0], (list, tuple))


def map_positions(coordinates: Any, func: Callable[[Any], Any]) -> Any:
    """Rebuild a coordinate tree with ``func`` applied to every leaf.

    Args:
        coordinates: GeoJSON coordinates of any nesting depth.
        func: Callable applied to each leaf position.

    Returns:
        A new tree of lists with the same shape as the input.
    """
    if _is_leaf(coordinates):
        return func(coordinates)
    return [map_positions(child, func) for child in coordinates]


def iter_positions(coordinates: Any) -> list[Any]:
    """Collect the leaf positions of a coordinate tree in document order."""
    leaves: list[Any] = []
    map_positions(coordinates, leaves.append)
    return leaves


def as_pair(position: Any) -> Position | None:
    """Return ``position`` as an ``(x, y)`` float tuple if it is exactly two real numbers.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        return None
    x, y = position
    if isinstance(x, bool) or isinstance(y, bool):
        return None
    if not isinstance(x, Real) or not isinstance(y, Real):
        return None
    return (float(x), float(y))


def is_finite_pair(position: Any) -> bool:
    """True when ``position`` is two finite real numbers."""
    pair = as_pair(position)
    return pair is not None and math.isfinite(pair[0]) and math.isfinite(pair[1])


def is_valid_wgs84(position: Any) -> bool:
    """True when ``position`` is a finite lon/lat pair inside the WGS84 range."""
    pair = as_pair(position)
    if pair is None:
        return False
    lon, lat = pair
    return -180.0 <= lon <= 180.0 and -90.0 <= lat <= 90.0


def first_position(geometry: dict | None) -> Any:
    """Return the first leaf position of a geometry, or None when it has none."""
    if not geometry or not geometry.get("coordinates"):
        return None
    leaves = iter_positions(geometry["coordinates"])
    return leaves[0] if leaves else None
