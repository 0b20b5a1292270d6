"""Point layer service — CO₂ sources, landfills, gravel pits and wastewater plants.

These layers come from tabular files with coordinate columns. Each row is
turned into a GeoJSON point and runs through the same reproject, validate
and area-filter chain as shapefile features.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import Table

from co2_atlas.lib.importer import LayerStats, is_prominent, parse_integer, parse_number, text_or_none
from co2_atlas.lib.source_reader import SourceRecord
from co2_atlas.models.point_layers import CO2Source, GravelPit, Landfill, WastewaterPlant
from co2_atlas.services.feature_import import (
    ImportContext,
    RowBuilder,
    import_records,
    point_geometry,
    read_source,
)

PROMINENT_PIN_SIZE = 4
DEFAULT_PIN_SIZE = 2


def co2_source_row(properties: dict[str, Any]) -> dict[str, Any]:
    """Map a CO₂ workbook row to co2_sources columns."""
    total = parse_number(properties.get("Total_CO2_t"))
    prominent = is_prominent(total)
    return {
        "plant_name": text_or_none(properties.get("Plant Name")),
        "plant_type": text_or_none(properties.get("Plant Type")),
        "total_co2_t": total,
        "fossil_co2_t": parse_number(properties.get("Fossil_CO2_t")),
        "biogenic_co2_t": parse_number(properties.get("Biogenic_CO2_t")),
        "comment": text_or_none(properties.get("Comment")) or "",
        "is_prominent": prominent,
        "pin_size": PROMINENT_PIN_SIZE if prominent else DEFAULT_PIN_SIZE,
    }


def landfill_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "company_name": text_or_none(properties.get("Firmen_Nam")),
        "location_name": text_or_none(properties.get("Standort_N")),
        "district": text_or_none(properties.get("Standort_B")),
        "address": text_or_none(properties.get("Standort_S")),
        "facility_type": text_or_none(properties.get("Anlagenbez")),
    }


def gravel_pit_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("name")),
        "resource": text_or_none(properties.get("resource")),
        "tags": text_or_none(properties.get("tags")),
    }


def wastewater_plant_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "pk": text_or_none(properties.get("PK")),
        "label": text_or_none(properties.get("LABEL")),
        "treatment_type": text_or_none(properties.get("ABW_BEHANDLUNG")),
        "capacity": parse_integer(properties.get("KAPAZITAET")),
    }


def _coordinates(lon_column: str, lat_column: str) -> Callable[[SourceRecord], dict]:
    def geometry_of(record: SourceRecord) -> dict:
        return point_geometry(record.properties.get(lon_column), record.properties.get(lat_column))

    return geometry_of


async def _import_point_file(
    context: ImportContext,
    path: Path,
    table: Table,
    build_row: RowBuilder,
    lon_column: str,
    lat_column: str,
) -> LayerStats:
    records = read_source(path, table.name)
    if records is None:
        return LayerStats(layer=table.name)

    stats = await import_records(
        context,
        records,
        table=table,
        kind="point",
        build_row=build_row,
        geometry_of=_coordinates(lon_column, lat_column),
    )
    logger.info(f"Imported {stats.imported} {table.name} ({stats.filtered} filtered out by area)")
    return stats


async def import_co2_sources(context: ImportContext) -> LayerStats:
    """Import CO₂ emitters from the first sheet of the CO₂ workbook."""
    return await _import_point_file(
        context, context.layout.co2_file, CO2Source.__table__, co2_source_row, "Longitude", "Latitude"
    )


async def import_landfills(context: ImportContext) -> LayerStats:
    """Import landfills.

    The landfill register labels its axes the other way round: the
    ``Y_Koordina`` column holds longitude and ``X_Koordina`` latitude.
    """
    return await _import_point_file(
        context, context.layout.landfill_file, Landfill.__table__, landfill_row, "Y_Koordina", "X_Koordina"
    )


async def import_gravel_pits(context: ImportContext) -> LayerStats:
    return await _import_point_file(
        context, context.layout.gravel_pit_file, GravelPit.__table__, gravel_pit_row, "center_lng", "center_lat"
    )


async def import_wastewater_plants(context: ImportContext) -> LayerStats:
    return await _import_point_file(
        context, context.layout.wastewater_file, WastewaterPlant.__table__, wastewater_plant_row, "long", "lat"
    )
