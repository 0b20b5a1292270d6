"""Import pipeline service — runs the full atlas import in a fixed order.

The run is strictly sequential on a single session: destination tables are
truncated before any layer is loaded, and the area-of-interest bounds are
loaded before any filtered layer. Only a database that cannot be reached at
all aborts the run; every other failure is counted and the run continues.
"""

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from co2_atlas.core.database import DatabaseUnavailableError
from co2_atlas.lib.geometry import CoordinateTransformer, load_area_bounds
from co2_atlas.lib.importer import DESTINATION_TABLES, FeatureCaps, ImportReport, SourceLayout
from co2_atlas.lib.importer.derive import CHOROPLETH_BUCKETS, LOWEST_BUCKET_COLOR, NO_DATA_COLOR
from co2_atlas.services.boundary_service import import_boundaries
from co2_atlas.services.feature_import import ImportContext
from co2_atlas.services.gas_service import import_gas_infrastructure
from co2_atlas.services.point_layer_service import (
    import_co2_sources,
    import_gravel_pits,
    import_landfills,
    import_wastewater_plants,
)
from co2_atlas.services.polygon_layer_service import (
    import_conservation_areas,
    import_groundwater_areas,
    import_settlement_areas,
)
from co2_atlas.services.transport_service import import_highways, import_railways
from co2_atlas.services.voting_district_service import import_voting_districts

CHOROPLETH_VIEW = "mv_voting_choropleth"

# Tables whose simplified_geom is refreshed after the load
SIMPLIFIED_GEOMETRY_TABLES: tuple[str, ...] = (
    "groundwater_protection",
    "conservation_areas",
    "settlement_areas",
    "gas_pipelines",
    "highways",
    "railways",
)


async def verify_connection(session: AsyncSession) -> None:
    """Round-trip a trivial query to prove the database is reachable.

    Raises:
        DatabaseUnavailableError: If the query cannot be executed.
    """
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        msg = f"Cannot connect to the database: {e}"
        raise DatabaseUnavailableError(msg) from e
    logger.info("Connected to database")


async def truncate_tables(session: AsyncSession, tables: tuple[str, ...] = DESTINATION_TABLES) -> list[str]:
    """Empty every destination table and reset its identity sequence.

    Each table is truncated in its own transaction; a failure is logged and
    the remaining tables are still truncated.

    Returns:
        Names of the tables that were truncated.
    """
    logger.info("Clearing existing data...")
    cleared: list[str] = []
    for table in tables:
        try:
            await session.execute(text(f"TRUNCATE TABLE {table} RESTART IDENTITY CASCADE"))
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.warning(f"Could not clear {table}: {e}")
            continue
        cleared.append(table)
    logger.info(f"Cleared {len(cleared)} of {len(tables)} tables")
    return cleared


def choropleth_case_sql() -> str:
    """SQL CASE expression mirroring :func:`co2_atlas.lib.importer.voting_color`."""
    branches = [f"WHEN NOT has_voting_data THEN '{NO_DATA_COLOR}'"]
    branches.extend(f"WHEN left_green_combined >= {bound} THEN '{color}'" for bound, color in CHOROPLETH_BUCKETS)
    branches.append(f"WHEN left_green_combined > 0 THEN '{LOWEST_BUCKET_COLOR}'")
    return "CASE " + " ".join(branches) + f" ELSE '{NO_DATA_COLOR}' END"


async def rebuild_choropleth_view(session: AsyncSession) -> bool:
    """Drop and recreate the voting choropleth materialized view.

    Returns:
        True if the view was rebuilt.
    """
    try:
        await session.execute(text(f"DROP MATERIALIZED VIEW IF EXISTS {CHOROPLETH_VIEW}"))
        await session.execute(
            text(
                f"CREATE MATERIALIZED VIEW {CHOROPLETH_VIEW} AS "
                f"SELECT vd.*, {choropleth_case_sql()} AS computed_fill_color "
                "FROM voting_districts vd "
                "WHERE geom IS NOT NULL AND geometry_valid = true"
            )
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.warning(f"Could not create materialized view {CHOROPLETH_VIEW}: {e}")
        return False
    logger.info(f"Created materialized view {CHOROPLETH_VIEW}")
    return True


async def refresh_derived_columns(session: AsyncSession, simplify_tolerance: float) -> None:
    """Recompute database-side derived columns after the load.

    Sets ``geometry_valid``, ``has_voting_data`` and ``center_point`` on voting
    districts and refreshes ``simplified_geom`` on the line and polygon tables.
    Failures are logged per statement.
    """
    logger.info("Updating geometry validation...")
    try:
        await session.execute(
            text(
                "UPDATE voting_districts SET "
                "geometry_valid = (geom IS NOT NULL AND ST_IsValid(geom)), "
                "has_voting_data = (spo_percent > 0 OR ovp_percent > 0 OR fpo_percent > 0 "
                "OR grune_percent > 0 OR kpo_percent > 0 OR neos_percent > 0), "
                "center_point = ST_PointOnSurface(geom)"
            )
        )
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.warning(f"Geometry validation update failed: {e}")

    for table in SIMPLIFIED_GEOMETRY_TABLES:
        try:
            await session.execute(
                text(
                    f"UPDATE {table} SET simplified_geom = ST_Multi(ST_Simplify(geom, :tolerance)) "
                    "WHERE geom IS NOT NULL"
                ).bindparams(tolerance=simplify_tolerance)
            )
            await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.warning(f"Could not create simplified geometries for {table}: {e}")


def log_run_report(report: ImportReport) -> None:
    """Emit the finished run as one structured record for the run history log."""
    logger.bind(run_report=report.as_dict()).info(
        f"Import finished: imported={report.total_imported} filtered={report.total_filtered} "
        f"errors={report.total_errors}"
    )


async def run_import(
    session: AsyncSession,
    *,
    layout: SourceLayout,
    transformer: CoordinateTransformer,
    caps: FeatureCaps,
    resource_mode: str,
    simplify_tolerance: float = 0.001,
) -> ImportReport:
    """Run the complete import.

    Args:
        session: Database session used for every statement of the run.
        layout: Source file locations.
        transformer: Coordinate transformer into WGS84.
        caps: Per-layer feature caps.
        resource_mode: Resource mode name, reported in the summary.
        simplify_tolerance: Simplification tolerance in degrees.

    Returns:
        The run report. ``report.fatal_error`` is set when the database
        could not be reached, in which case nothing was imported.
    """
    report = ImportReport(resource_mode=resource_mode)
    logger.info(f"Starting data import (resource mode: {resource_mode})")

    layout.check_directories()

    try:
        await verify_connection(session)
    except DatabaseUnavailableError as e:
        logger.error(str(e))
        report.fatal_error = str(e)
        log_run_report(report)
        return report

    area = load_area_bounds(layout.area_of_interest_files(), transformer)
    context = ImportContext(
        session=session,
        transformer=transformer,
        layout=layout,
        area=area,
        caps=caps,
        simplify_tolerance=simplify_tolerance,
    )

    await truncate_tables(session)

    report.add(await import_boundaries(context))
    report.add(await import_voting_districts(context))

    report.add(await import_co2_sources(context))
    report.add(await import_landfills(context))
    report.add(await import_gravel_pits(context))
    report.add(await import_wastewater_plants(context))

    for stats in await import_gas_infrastructure(context):
        report.add(stats)

    report.add(await import_groundwater_areas(context))
    report.add(await import_conservation_areas(context))
    report.add(await import_settlement_areas(context))

    report.add(await import_highways(context))
    report.add(await import_railways(context))

    await rebuild_choropleth_view(session)
    await refresh_derived_columns(session, simplify_tolerance)

    for line in report.summary_lines():
        logger.info(line)
    log_run_report(report)
    return report
