"""Shapefile reader using GeoPandas with pyogrio engine.

Features are returned in the file's own coordinates as GeoJSON mappings;
reprojection is left to the coordinate transformer because many of the
source files carry no ``.prj`` or a wrong one.
"""

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import geopandas as gpd
import numpy as np
import shapely
from loguru import logger
from shapely.geometry import mapping

# Maximum file size for shapefile input (2 GB, nationwide layers are large)
MAX_SHAPEFILE_SIZE_BYTES = 2 * 1024 * 1024 * 1024


@dataclass
class SourceRecord:
    """One raw source feature or row with its original attribute names."""

    properties: dict[str, Any] = field(default_factory=dict)
    geometry: dict | None = None


def read_shapefile(file_path: Path, max_features: int | None = None) -> list[SourceRecord]:
    """Read a shapefile into raw source records.

    Args:
        file_path: Path to the .shp file.
        max_features: Stop after this many features (hard truncation).

    Returns:
        List of SourceRecord objects; geometry is None for empty shapes.

    Raises:
        ValueError: If the file exceeds the size limit.
    """
    logger.info(f"Reading shapefile: {file_path}")

    if file_path.is_file() and file_path.stat().st_size > MAX_SHAPEFILE_SIZE_BYTES:
        msg = f"Shapefile exceeds maximum size of {MAX_SHAPEFILE_SIZE_BYTES // (1024 * 1024)} MB: {file_path}"
        raise ValueError(msg)

    read_kwargs: dict[str, Any] = {"engine": "pyogrio"}
    if max_features is not None:
        read_kwargs["rows"] = max_features
    gdf = gpd.read_file(file_path, **read_kwargs)

    if max_features is not None and len(gdf) > max_features:
        gdf = gdf.iloc[:max_features]

    geometry_column = gdf.geometry.name

    records: list[SourceRecord] = []
    for _, row in gdf.iterrows():
        props = {col: serialize_value(row[col]) for col in gdf.columns if col != geometry_column}
        records.append(SourceRecord(properties=props, geometry=_to_geojson(row[geometry_column])))

    logger.info(f"Read {len(records)} features from {file_path.name}")
    return records


def _to_geojson(geom: object) -> dict | None:
    """Convert a shapely geometry to a 2-D GeoJSON mapping."""
    if geom is None or not hasattr(geom, "geom_type") or geom.is_empty:
        return None
    flat = shapely.force_2d(geom)
    return dict(mapping(flat))


def serialize_value(val: object) -> object:
    """Serialize a GeoDataFrame value to JSON-safe type.

    Returns None for NaN/Inf values since they are not valid JSON.
    """
    if val is None:
        return None
    if isinstance(val, float) and (math.isnan(val) or math.isinf(val)):
        return None
    if isinstance(val, (np.integer,)):
        return int(val)
    if isinstance(val, (np.floating,)):
        v = float(val)
        return None if math.isnan(v) or math.isinf(v) else v
    if isinstance(val, np.bool_):
        return bool(val)
    if isinstance(val, np.ndarray):
        return val.tolist()
    if hasattr(val, "isoformat"):
        return val.isoformat()
    return val
