"""Boundary service — imports study-area commune boundaries."""

from typing import Any

from loguru import logger

from co2_atlas.lib.importer import LayerStats, first_present, text_or_none
from co2_atlas.models.study_area import StudyAreaBoundary
from co2_atlas.services.feature_import import ImportContext, import_records, read_source


def boundary_row(properties: dict[str, Any]) -> dict[str, Any]:
    """Map commune attributes to study_area_boundaries columns."""
    return {
        "g_id": text_or_none(first_present(properties, "g_id", "G_ID")),
        "g_name": text_or_none(first_present(properties, "g_name", "G_NAME")),
    }


async def import_boundaries(context: ImportContext) -> LayerStats:
    """Import the study-area commune boundaries, upserting on ``g_id``.

    Boundaries define the study area itself, so they are not area-filtered.

    Args:
        context: Import context.

    Returns:
        Statistics for the study_area_boundaries layer.
    """
    table = StudyAreaBoundary.__table__
    logger.info("Importing study area boundaries...")

    records = read_source(context.layout.boundary_file, table.name)
    if records is None:
        return LayerStats(layer=table.name)

    stats = await import_records(
        context,
        records,
        table=table,
        kind="polygon",
        build_row=boundary_row,
        area_filtered=False,
        upsert_key="g_id",
    )
    logger.info(f"Imported {stats.imported} boundaries")
    return stats
