"""Geometry library — reprojection, validation, simplification, and region filtering.

Public API:
    - CoordinateTransformer: Ordered-candidate reprojection into WGS84
    - ProjCandidate / build_candidates: pyproj-backed source projections
    - KNOWN_PROJECTIONS: proj4 definitions of the Austrian national grids
    - is_valid_geojson: Structural validity gate
    - complexity: Vertex count
    - simplify: Douglas-Peucker simplification that never raises
    - geometry_bbox: Bounding box of a geometry
    - as_multi: Promote single-part geometries to Multi*
    - AreaBounds / AreaFilter: Area-of-interest bounds and filter
    - load_area_bounds: Build the filter from boundary shapefiles
    - GeometryRejectedError: Record-level geometry failure
"""

from co2_atlas.lib.geometry.bounds import AreaBounds, AreaFilter, combine_bounds, load_area_bounds
from co2_atlas.lib.geometry.coords import first_position, is_valid_wgs84, iter_positions, map_positions
from co2_atlas.lib.geometry.transformer import (
    DEFAULT_CANDIDATE_CODES,
    KNOWN_PROJECTIONS,
    CoordinateTransformer,
    ProjCandidate,
    build_candidates,
)
from co2_atlas.lib.geometry.validator import (
    BBox,
    GeometryRejectedError,
    as_multi,
    complexity,
    geometry_bbox,
    is_valid_geojson,
    simplify,
)

__all__ = [
    "DEFAULT_CANDIDATE_CODES",
    "KNOWN_PROJECTIONS",
    "AreaBounds",
    "AreaFilter",
    "BBox",
    "CoordinateTransformer",
    "GeometryRejectedError",
    "ProjCandidate",
    "as_multi",
    "build_candidates",
    "combine_bounds",
    "complexity",
    "first_position",
    "geometry_bbox",
    "is_valid_geojson",
    "is_valid_wgs84",
    "iter_positions",
    "load_area_bounds",
    "map_positions",
    "simplify",
]
