"""Gas infrastructure service — dispatches the gas network shapefiles to their tables.

Which file feeds which table, and whether it holds lines or points, is
declared in :data:`co2_atlas.lib.importer.GAS_MANIFEST`; this module only
knows how to map each destination's attributes.
"""

from typing import Any

from loguru import logger
from sqlalchemy import Table

from co2_atlas.lib.importer import (
    GasSourceEntry,
    LayerStats,
    first_present,
    get_gas_manifest,
    parse_integer,
    parse_number,
    text_or_none,
)
from co2_atlas.models.line_layers import GasPipeline
from co2_atlas.models.point_layers import CompressorStation, GasDistributionPoint, GasStorageSite
from co2_atlas.services.feature_import import ImportContext, RowBuilder, import_records, read_source


def gas_pipeline_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(first_present(properties, "Pipeline", "name")),
        "operator": text_or_none(properties.get("Operator")),
        "diameter": parse_integer(properties.get("Diameter"), default=None),
        "pressure_level": text_or_none(properties.get("Pressure")),
        "pipeline_type": text_or_none(properties.get("Type")) or "Gas Pipeline",
    }


def gas_storage_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")),
        "operator": text_or_none(properties.get("Operator")),
        "storage_type": text_or_none(properties.get("Type")),
        "capacity_bcm": parse_number(properties.get("Capacity")),
    }


def gas_distribution_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")),
        "type": "Distribution Point",
        "operator": text_or_none(properties.get("Operator")),
    }


def compressor_station_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")),
        "operator": text_or_none(properties.get("Operator")),
        "capacity_info": text_or_none(properties.get("Capacity")),
    }


GAS_DESTINATIONS: dict[str, tuple[Table, RowBuilder]] = {
    "gas_pipelines": (GasPipeline.__table__, gas_pipeline_row),
    "gas_storage_sites": (GasStorageSite.__table__, gas_storage_row),
    "gas_distribution_points": (GasDistributionPoint.__table__, gas_distribution_row),
    "compressor_stations": (CompressorStation.__table__, compressor_station_row),
}


async def import_gas_source(context: ImportContext, entry: GasSourceEntry) -> LayerStats:
    """Import one gas network shapefile into the table its manifest entry names.

    Args:
        context: Import context.
        entry: Manifest entry for the source file.

    Returns:
        Statistics for the entry's destination table.

    Raises:
        ValueError: If the entry names a table with no known column mapping.
    """
    if entry.table not in GAS_DESTINATIONS:
        msg = f"No column mapping for gas destination table: {entry.table}"
        raise ValueError(msg)
    table, build_row = GAS_DESTINATIONS[entry.table]

    path = context.layout.gas_file(entry)
    records = read_source(path, table.name)
    if records is None:
        return LayerStats(layer=table.name)

    stats = await import_records(context, records, table=table, kind=entry.kind, build_row=build_row)
    suffix = f" ({stats.filtered} filtered out by area)" if stats.filtered else ""
    logger.info(f"Imported {stats.imported} from {entry.filename}{suffix}")
    return stats


async def import_gas_infrastructure(
    context: ImportContext,
    manifest: list[GasSourceEntry] | None = None,
) -> list[LayerStats]:
    """Import every gas network shapefile listed in the manifest.

    Args:
        context: Import context.
        manifest: Entries to import (defaults to the full gas manifest).

    Returns:
        One LayerStats per manifest entry, in manifest order.
    """
    entries = manifest if manifest is not None else get_gas_manifest()
    results: list[LayerStats] = []
    for entry in entries:
        logger.info(f"Importing {entry.filename}...")
        results.append(await import_gas_source(context, entry))
    return results
