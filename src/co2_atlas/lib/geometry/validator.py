"""Structural validation, complexity measurement, and simplification of GeoJSON geometries."""

from typing import Any

from loguru import logger
from shapely.geometry import mapping, shape

from co2_atlas.lib.geometry.coords import as_pair, is_finite_pair, iter_positions, map_positions

BBox = tuple[float, float, float, float]

_MULTI_TYPES = {
    "Point": "MultiPoint",
    "LineString": "MultiLineString",
    "Polygon": "MultiPolygon",
}


class GeometryRejectedError(ValueError):
    """A source geometry failed validation or could not be placed in WGS84."""


def is_valid_geojson(geometry: Any) -> bool:
    """Check that a geometry has a type and only finite two-number positions.

    Nesting depth is not checked against the declared type; any depth whose
    leaves are all finite ``[x, y]`` pairs is accepted.
    """
    if not isinstance(geometry, dict) or not geometry.get("type"):
        return False
    coordinates = geometry.get("coordinates")
    if not isinstance(coordinates, (list, tuple)) or len(coordinates) == 0:
        return False
    return all(is_finite_pair(position) for position in iter_positions(coordinates))


def complexity(geometry: dict) -> int:
    """Count the vertices of a geometry."""
    coordinates = geometry.get("coordinates")
    if coordinates is None:
        return 0
    return len(iter_positions(coordinates))


def geometry_bbox(geometry: dict | None) -> BBox | None:
    """Compute ``(min_lon, min_lat, max_lon, max_lat)`` over a geometry's positions.

    Returns None when the geometry has no usable positions.
    """
    if not geometry or geometry.get("coordinates") is None:
        return None
    pairs = [pair for pair in (as_pair(p) for p in iter_positions(geometry["coordinates"])) if pair is not None]
    if not pairs:
        return None
    xs = [x for x, _ in pairs]
    ys = [y for _, y in pairs]
    return (min(xs), min(ys), max(xs), max(ys))


def simplify(geometry: dict, tolerance: float) -> dict:
    """Reduce the vertex count of a line or polygon geometry.

    Uses shapely's topology-preserving Douglas-Peucker simplifier. Any
    failure returns the input geometry unchanged.

    Args:
        geometry: GeoJSON geometry in WGS84.
        tolerance: Maximum deviation in degrees.

    Returns:
        The simplified geometry, or the original on failure.
    """
    try:
        simplified = shape(geometry).simplify(tolerance, preserve_topology=True)
        if simplified.is_empty:
            return geometry
        result = mapping(simplified)
    except Exception as e:
        kind = geometry.get("type") if isinstance(geometry, dict) else geometry
        logger.debug(f"Simplification failed for {kind}: {e}")
        return geometry
    return {"type": result["type"], "coordinates": map_positions(result["coordinates"], list)}


def as_multi(geometry: dict) -> dict:
    """Promote a single-part geometry to its Multi* counterpart."""
    multi_type = _MULTI_TYPES.get(geometry["type"])
    if multi_type is None:
        return geometry
    return {"type": multi_type, "coordinates": [geometry["coordinates"]]}
