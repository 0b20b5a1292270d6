"""Unsuitable-area service — groundwater, conservation and settlement polygons.

These national datasets are much larger than the study area. Reading is
capped per file according to the resource mode, and polygons above a vertex
threshold are simplified before storage.
"""

from typing import Any

from loguru import logger

from co2_atlas.lib.importer import LayerStats, parse_integer, text_or_none
from co2_atlas.models.polygon_layers import ConservationArea, GroundwaterProtectionArea, SettlementArea
from co2_atlas.services.feature_import import ImportContext, import_files

GROUNDWATER_SIMPLIFY_ABOVE = 1000
CONSERVATION_SIMPLIFY_ABOVE = 500
SETTLEMENT_SIMPLIFY_ABOVE = 500


def groundwater_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")) or "Groundwater Protection Area",
        "protection_zone": text_or_none(properties.get("Zone")) or "Protected",
    }


def conservation_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")) or "Conservation Area",
        "protection_level": text_or_none(properties.get("Protection")) or "Protected",
        "area_type": text_or_none(properties.get("Type")) or "Nature Reserve",
    }


def settlement_row(properties: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": text_or_none(properties.get("Name")) or "Residential Area",
        "area_type": "Residential",
        "population": parse_integer(properties.get("Population")),
    }


async def import_groundwater_areas(context: ImportContext) -> LayerStats:
    """Import groundwater protection zones."""
    logger.info("Importing groundwater protection areas...")
    return await import_files(
        context,
        context.layout.groundwater_files(),
        table=GroundwaterProtectionArea.__table__,
        kind="polygon",
        build_row=groundwater_row,
        max_features=context.caps.groundwater,
        simplify_above=GROUNDWATER_SIMPLIFY_ABOVE,
    )


async def import_conservation_areas(context: ImportContext) -> LayerStats:
    """Import nature conservation areas (Salzburg plus the 24 Upper Austria tiles)."""
    logger.info("Importing conservation areas...")
    return await import_files(
        context,
        context.layout.conservation_files(),
        table=ConservationArea.__table__,
        kind="polygon",
        build_row=conservation_row,
        max_features=context.caps.conservation,
        simplify_above=CONSERVATION_SIMPLIFY_ABOVE,
    )


async def import_settlement_areas(context: ImportContext) -> LayerStats:
    """Import residential settlement areas."""
    logger.info("Importing residential areas...")
    return await import_files(
        context,
        context.layout.settlement_files(),
        table=SettlementArea.__table__,
        kind="polygon",
        build_row=settlement_row,
        max_features=context.caps.settlement,
        simplify_above=SETTLEMENT_SIMPLIFY_ABOVE,
    )
