"""Shared record pipeline for the per-layer importers.

Every layer runs the same chain per source record: reproject, validate,
filter against the area of interest, derive columns, then write one row in
its own transaction. Layer services supply only the source files and a row
builder mapping source attributes to destination columns.
"""

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from geoalchemy2.shape import from_shape
from loguru import logger
from shapely.errors import ShapelyError
from shapely.geometry import shape
from sqlalchemy import Table, func
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from co2_atlas.lib.geometry import (
    AreaFilter,
    CoordinateTransformer,
    GeometryRejectedError,
    as_multi,
    complexity,
    first_position,
    geometry_bbox,
    is_valid_geojson,
    is_valid_wgs84,
    iter_positions,
    simplify,
)
from co2_atlas.lib.importer import DEVELOPMENT_CAPS, FeatureCaps, LayerStats, Outcome, SourceLayout, parse_number
from co2_atlas.lib.source_reader import SourceRecord, load_records

FeatureKind = Literal["point", "line", "polygon"]
RowBuilder = Callable[[dict[str, Any]], dict[str, Any]]

_STORED_TYPES: dict[str, str] = {
    "point": "Point",
    "line": "MultiLineString",
    "polygon": "MultiPolygon",
}


@dataclass
class ImportContext:
    """Everything an importer needs besides its own source files."""

    session: AsyncSession
    transformer: CoordinateTransformer
    layout: SourceLayout
    area: AreaFilter = field(default_factory=AreaFilter)
    caps: FeatureCaps = DEVELOPMENT_CAPS
    simplify_tolerance: float = 0.001


def point_geometry(lon: Any, lat: Any) -> dict:
    """Build a GeoJSON point from two tabular cells.

    Cells without a leading number become NaN so the record fails validation
    rather than landing at the origin.
    """
    return {"type": "Point", "coordinates": [parse_number(lon, math.nan), parse_number(lat, math.nan)]}


def prepare_geometry(
    context: ImportContext,
    geometry: dict | None,
    kind: FeatureKind,
    *,
    area_filtered: bool = True,
    simplify_above: int | None = None,
) -> dict | None:
    """Reproject, validate and area-filter one source geometry.

    Args:
        context: Import context holding transformer, area filter and tolerance.
        geometry: Raw GeoJSON geometry in source coordinates.
        kind: Destination geometry kind.
        area_filtered: Whether to drop geometries outside the area of interest.
        simplify_above: Simplify when the vertex count exceeds this threshold.

    Returns:
        The geometry ready for storage, or None when it lies outside the area.

    Raises:
        GeometryRejectedError: If the geometry is missing, malformed, cannot be
            placed in WGS84 or does not match the destination kind.
    """
    if geometry is None:
        msg = "missing geometry"
        raise GeometryRejectedError(msg)

    transformed = context.transformer.transform_geometry(geometry)
    if not is_valid_geojson(transformed):
        msg = f"invalid {geometry.get('type', 'untyped')} geometry"
        raise GeometryRejectedError(msg)
    if not all(is_valid_wgs84(position) for position in iter_positions(transformed["coordinates"])):
        msg = "no candidate projection places the geometry in WGS84"
        raise GeometryRejectedError(msg)

    if kind == "point":
        lon, lat = first_position(transformed)
        if area_filtered and not context.area.point_within_bounds(lon, lat):
            return None
        return {"type": "Point", "coordinates": [lon, lat]}

    if area_filtered and not context.area.bounds_intersect(geometry_bbox(transformed)):
        return None

    if simplify_above is not None and complexity(transformed) > simplify_above:
        transformed = simplify(transformed, context.simplify_tolerance)

    stored = as_multi(transformed)
    if stored["type"] != _STORED_TYPES[kind]:
        msg = f"expected {_STORED_TYPES[kind]}, got {stored['type']}"
        raise GeometryRejectedError(msg)
    return stored


def to_wkb(geometry: dict) -> Any:
    """Convert a WGS84 GeoJSON geometry into a PostGIS WKB element."""
    return from_shape(shape(geometry), srid=4326)


async def write_row(
    session: AsyncSession,
    table: Table,
    values: dict[str, Any],
    *,
    upsert_key: str | None = None,
) -> bool:
    """Insert (or upsert) a single row and commit it.

    Args:
        session: Database session.
        table: Destination table.
        values: Column values.
        upsert_key: Unique column to update on conflict instead of failing.

    Returns:
        True if the row was written, False if the write failed and was rolled back.
    """
    stmt = pg_insert(table).values(**values)
    if upsert_key is not None:
        updates = {column: stmt.excluded[column] for column in values if column != upsert_key}
        updates["updated_at"] = func.now()
        stmt = stmt.on_conflict_do_update(index_elements=[upsert_key], set_=updates)

    try:
        await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.warning(f"Insert into {table.name} failed: {e}")
        return False
    return True


def read_source(path: Path, layer: str, max_features: int | None = None) -> list[SourceRecord] | None:
    """Read a source file, logging and skipping missing or unreadable files."""
    if not path.exists():
        logger.warning(f"{layer}: source file not found: {path}")
        return None
    try:
        records = load_records(path, max_features=max_features)
    except Exception as e:
        logger.error(f"{layer}: could not read {path}: {e}")
        return None
    logger.info(f"{layer}: read {len(records)} records from {path.name}")
    return records


async def import_records(
    context: ImportContext,
    records: Iterable[SourceRecord],
    *,
    table: Table,
    kind: FeatureKind,
    build_row: RowBuilder,
    geometry_of: Callable[[SourceRecord], dict | None] | None = None,
    area_filtered: bool = True,
    simplify_above: int | None = None,
    upsert_key: str | None = None,
) -> LayerStats:
    """Run the record pipeline over one batch of source records.

    A failure on one record is counted and never stops the batch.

    Args:
        context: Import context.
        records: Source records to import.
        table: Destination table.
        kind: Destination geometry kind.
        build_row: Maps source attributes to destination columns.
        geometry_of: Extracts the source geometry (defaults to ``record.geometry``).
        area_filtered: Whether to apply the area-of-interest filter.
        simplify_above: Vertex threshold above which geometries are simplified.
        upsert_key: Natural key column for upserts.

    Returns:
        Per-layer statistics for this batch.
    """
    stats = LayerStats(layer=table.name)

    for index, record in enumerate(records):
        try:
            source_geometry = geometry_of(record) if geometry_of is not None else record.geometry
            geometry = prepare_geometry(
                context,
                source_geometry,
                kind,
                area_filtered=area_filtered,
                simplify_above=simplify_above,
            )
        except GeometryRejectedError as e:
            logger.debug(f"{table.name}: record {index} rejected: {e}")
            stats.record(Outcome.ERROR)
            continue

        if geometry is None:
            stats.record(Outcome.FILTERED)
            continue

        try:
            values = build_row(record.properties)
            values["geom"] = to_wkb(geometry)
        except (ValueError, TypeError, ShapelyError) as e:
            logger.warning(f"{table.name}: record {index} could not be mapped: {e}")
            stats.record(Outcome.ERROR)
            continue
        values["properties"] = record.properties

        written = await write_row(context.session, table, values, upsert_key=upsert_key)
        stats.record(Outcome.IMPORTED if written else Outcome.ERROR)

    return stats


async def import_files(
    context: ImportContext,
    paths: Iterable[Path],
    *,
    table: Table,
    kind: FeatureKind,
    build_row: RowBuilder,
    max_features: int | None = None,
    simplify_above: int | None = None,
) -> LayerStats:
    """Import every existing file of a multi-file layer into one table.

    The feature cap applies to each file separately.
    """
    stats = LayerStats(layer=table.name)
    for path in paths:
        records = read_source(path, table.name, max_features=max_features)
        if records is None:
            continue
        file_stats = await import_records(
            context,
            records,
            table=table,
            kind=kind,
            build_row=build_row,
            simplify_above=simplify_above,
        )
        logger.info(
            f"{table.name}: {path.name} imported={file_stats.imported} "
            f"filtered={file_stats.filtered} errors={file_stats.errors}"
        )
        stats = stats.merge(file_stats)
    return stats
