"""Voting district service — imports commune election results for the choropleth layer."""

from typing import Any

from loguru import logger

from co2_atlas.lib.importer import LayerStats, first_present, parse_integer, text_or_none, voting_figures
from co2_atlas.models.voting_district import VotingDistrict
from co2_atlas.services.feature_import import ImportContext, import_records, read_source

UNKNOWN_DISTRICT_NAME = "Unknown District"


def voting_district_row(properties: dict[str, Any]) -> dict[str, Any]:
    """Map commune attributes to voting_districts columns.

    A missing or zero district code is stored as NULL, which never conflicts
    on upsert.
    """
    gkz = parse_integer(properties.get("gkz"), default=None)
    row: dict[str, Any] = {
        "gkz": gkz or None,
        "name": text_or_none(first_present(properties, "g_name", "name")) or UNKNOWN_DISTRICT_NAME,
    }
    row.update(voting_figures(properties).as_columns())
    row["geometry_valid"] = True
    return row


async def import_voting_districts(context: ImportContext) -> LayerStats:
    """Import voting districts, upserting on the district code ``gkz``.

    Args:
        context: Import context.

    Returns:
        Statistics for the voting_districts layer.
    """
    table = VotingDistrict.__table__
    logger.info("Importing voting districts...")

    records = read_source(context.layout.voting_file, table.name)
    if records is None:
        return LayerStats(layer=table.name)

    stats = await import_records(
        context,
        records,
        table=table,
        kind="polygon",
        build_row=voting_district_row,
        area_filtered=False,
        upsert_key="gkz",
    )
    with_data = sum(1 for record in records if voting_figures(record.properties).has_voting_data)
    logger.info(
        f"Imported {stats.imported} voting districts from {len(records)} features ({with_data} with voting data)"
    )
    return stats
