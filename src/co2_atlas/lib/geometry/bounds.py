"""Area-of-interest bounds and the per-feature region filter.

National source layers cover all of Austria while the atlas only shows the
study region. The combined bounding box of the region's boundary polygons
is loaded once per run and every importer checks features against it
before writing. When no boundary source could be read the filter is
fail-open and lets everything through.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from co2_atlas.lib.geometry.transformer import CoordinateTransformer
from co2_atlas.lib.geometry.validator import BBox, geometry_bbox, is_valid_geojson
from co2_atlas.lib.source_reader import read_shapefile


@dataclass(frozen=True)
class AreaBounds:
    """Inclusive lon/lat bounding box."""

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    @classmethod
    def from_bbox(cls, bbox: BBox) -> "AreaBounds":
        return cls(*bbox)

    def as_bbox(self) -> BBox:
        return (self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def expand(self, other: "AreaBounds") -> "AreaBounds":
        """Return the smallest box covering both boxes."""
        return AreaBounds(
            min(self.min_lon, other.min_lon),
            min(self.min_lat, other.min_lat),
            max(self.max_lon, other.max_lon),
            max(self.max_lat, other.max_lat),
        )

    def contains_point(self, lon: float, lat: float) -> bool:
        return self.min_lon <= lon <= self.max_lon and self.min_lat <= lat <= self.max_lat

    def intersects(self, bbox: BBox) -> bool:
        """Separating-axis overlap test; touching edges count as overlap."""
        min_lon, min_lat, max_lon, max_lat = bbox
        return not (
            max_lon < self.min_lon or min_lon > self.max_lon or max_lat < self.min_lat or min_lat > self.max_lat
        )


@dataclass(frozen=True)
class AreaFilter:
    """Region filter applied by every importer; passes everything when unbounded."""

    bounds: AreaBounds | None = None

    def point_within_bounds(self, lon: float, lat: float) -> bool:
        if self.bounds is None:
            return True
        return self.bounds.contains_point(lon, lat)

    def bounds_intersect(self, bbox: BBox | None) -> bool:
        if self.bounds is None or bbox is None:
            return True
        return self.bounds.intersects(bbox)


def combine_bounds(boxes: Iterable[BBox]) -> AreaBounds | None:
    """Fold bounding boxes into one covering box, or None for no boxes."""
    combined: AreaBounds | None = None
    for bbox in boxes:
        current = AreaBounds.from_bbox(bbox)
        combined = current if combined is None else combined.expand(current)
    return combined


def load_area_bounds(paths: Iterable[Path], transformer: CoordinateTransformer) -> AreaFilter:
    """Build the area filter from one or more boundary shapefiles.

    Each feature is reprojected and, if valid, its bounding box widens the
    running combined box. Missing or unreadable files are logged and skipped.

    Args:
        paths: Boundary shapefiles describing the area of interest.
        transformer: Coordinate transformer for the boundary geometries.

    Returns:
        An AreaFilter, unbounded when no boundary feature could be read.
    """
    boxes: list[BBox] = []

    for path in paths:
        if not path.exists():
            logger.info(f"Area file not found: {path}")
            continue
        logger.info(f"Processing {path.name}...")
        try:
            records = read_shapefile(path)
        except Exception as e:
            logger.warning(f"Could not process {path}: {e}")
            continue
        for record in records:
            geometry = transformer.transform_geometry(record.geometry)
            if not is_valid_geojson(geometry):
                continue
            bbox = geometry_bbox(geometry)
            if bbox is not None:
                boxes.append(bbox)

    bounds = combine_bounds(boxes)
    if bounds is None:
        logger.info("No area bounds loaded - will import all data")
    else:
        logger.info("Area bounds loaded: [{}]".format(", ".join(f"{v:.3f}" for v in bounds.as_bbox())))
    return AreaFilter(bounds)
