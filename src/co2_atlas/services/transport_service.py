"""Transport service — primary roads and railways."""

from typing import Any

from loguru import logger

from co2_atlas.lib.importer import LayerStats, first_present, text_or_none
from co2_atlas.models.line_layers import Highway, Railway
from co2_atlas.services.feature_import import ImportContext, import_files


def highway_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(first_present(properties, "Name", "ref")),
        "highway_number": text_or_none(properties.get("ref")),
        "road_type": "Primary Road",
    }


def railway_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")) or "Railway Line",
        "railway_type": text_or_none(properties.get("Type")) or "Main Line",
        "operator": text_or_none(properties.get("Operator")) or "ÖBB",
    }


async def import_highways(context: ImportContext) -> LayerStats:
    logger.info("Importing roads...")
    return await import_files(
        context,
        context.layout.road_files(),
        table=Highway.__table__,
        kind="line",
        build_row=highway_row,
        max_features=context.caps.highways,
    )


async def import_railways(context: ImportContext) -> LayerStats:
    logger.info("Importing railways...")
    return await import_files(
        context,
        context.layout.railway_files(),
        table=Railway.__table__,
        kind="line",
        build_row=railway_row,
        max_features=context.caps.railways,
    )
