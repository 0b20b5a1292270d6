"""Typer CLI root application."""

import typer

from co2_atlas.core.config import get_settings
from co2_atlas.core.logging import setup_logging

app = typer.Typer(name="co2-atlas", help="CO₂ Storage Atlas geodata import CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir)


def _register_subcommands() -> None:
    """Register all CLI subcommand groups."""
    from co2_atlas.cli.db_cmd import db_app
    from co2_atlas.cli.import_cmd import import_app

    app.add_typer(db_app, name="db", help="Database migration commands")
    app.add_typer(import_app, name="import", help="Data import commands")


_register_subcommands()
