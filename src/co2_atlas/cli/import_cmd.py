"""Import CLI commands for the atlas source data."""

import asyncio
from pathlib import Path

import typer

from co2_atlas.core.config import Settings, get_settings
from co2_atlas.lib.geometry import CoordinateTransformer, build_candidates
from co2_atlas.lib.importer import FeatureCaps, ImportReport, SourceLayout, caps_for_mode

import_app = typer.Typer()


def build_transformer(settings: Settings) -> CoordinateTransformer:
    """Build the coordinate transformer from the configured candidates and window."""
    return CoordinateTransformer(
        candidates=build_candidates(settings.crs_candidate_list),
        geographic_window=settings.geographic_window_bbox,
    )


@import_app.command("all")
def import_all(
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Source data root (defaults to DATA_DIR)"),  # noqa: B008
    mode: str | None = typer.Option(  # noqa: B008
        None, "--mode", help="Resource mode: production, development or unrestricted (defaults to RESOURCE_MODE)"
    ),
) -> None:
    """Truncate the atlas tables and import every source layer."""
    settings = get_settings()
    resource_mode = (mode or settings.resource_mode).lower()
    try:
        settings.require_database_url()
        caps = caps_for_mode(resource_mode)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from None

    report = asyncio.run(_import_all(settings, data_dir or settings.data_dir, resource_mode, caps))

    typer.echo("")
    for line in report.summary_lines():
        typer.echo(line)
    if not report.succeeded:
        raise typer.Exit(code=1)


async def _import_all(settings: Settings, data_dir: Path, resource_mode: str, caps: FeatureCaps) -> ImportReport:
    """Async implementation of the full import."""
    from co2_atlas.core.database import dispose_engine, get_session_factory, init_engine
    from co2_atlas.services.import_pipeline_service import run_import

    init_engine(settings.require_database_url(), schema=settings.database_schema)

    try:
        factory = get_session_factory()
        async with factory() as session:
            return await run_import(
                session,
                layout=SourceLayout(data_dir),
                transformer=build_transformer(settings),
                caps=caps,
                resource_mode=resource_mode,
                simplify_tolerance=settings.simplify_tolerance,
            )
    finally:
        await dispose_engine()


@import_app.command("check")
def import_check(
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Source data root (defaults to DATA_DIR)"),  # noqa: B008
) -> None:
    """Report which source directories exist and the area-of-interest bounds, without a database."""
    from co2_atlas.lib.geometry import load_area_bounds

    settings = get_settings()
    layout = SourceLayout(data_dir or settings.data_dir)

    typer.echo(f"Data directory: {layout.data_dir}")
    for name, found in layout.check_directories().items():
        typer.echo(f"  {'found  ' if found else 'MISSING'}  {name}")

    area = load_area_bounds(layout.area_of_interest_files(), build_transformer(settings))
    if area.bounds is None:
        typer.echo("Area of interest: none loaded (all features will be imported)")
    else:
        min_lon, min_lat, max_lon, max_lat = area.bounds.as_bbox()
        typer.echo(f"Area of interest: [{min_lon:.3f}, {min_lat:.3f}, {max_lon:.3f}, {max_lat:.3f}]")
